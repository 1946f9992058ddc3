"""
Archivo de conveniencia para usar el CLI de Flask (con FLASK_APP=wsgi.py):
    python manage.py run
    python manage.py db upgrade
    python manage.py catalogos seed
    python manage.py resoluciones avanzar-cuotas   # cron: 0 0 1 * *
"""

from flask.cli import main

if __name__ == "__main__":
    main()
