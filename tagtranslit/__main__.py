# tagtranslit/__main__.py
import sys


def cli(argv=None):
    """
    Launcher so you can run:
      - python3 -m tagtranslit [options] file(s) | folder(s)
    """
    from .cli import app
    return app(args=argv, prog_name="tagtranslit")


if __name__ == "__main__":
    sys.exit(cli())
