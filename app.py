"""WSGI entry point: ``flask --app app run`` or ``python app.py``."""
import os

from time_attendance.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run(host=os.getenv("HOST", "127.0.0.1"), port=int(os.getenv("PORT", "3001")))
