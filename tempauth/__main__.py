"""Allow ``python -m tempauth``; this is also what the failsafe job runs."""

from tempauth.cli import app

if __name__ == "__main__":
    app()
