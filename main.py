from rich.pretty import pprint

from burrow import CLI
from burrow.logs import configure_logging

__prog__ = "demo"


if __name__ == '__main__':
    configure_logging()
    pprint(CLI("demo", shell=True, fancy=True, colorful=True).run())
