#run: flask --app retireplan.wsgi run --port 3000 --debug
#run: python -m retireplan.wsgi

from retireplan.app import create_app
from retireplan.config import get_settings

app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
