from rich.pretty import pprint

from gnuopt import *

optmap = {
    "v": "*switch",
    "verbose": "&v",
    "o": "string",
    "output": "&o",
    "j": "integer",
    "jobs": "&j",
    "D": "*string",
    "c": "~string",
}


if __name__ == '__main__':
    pprint(parse(optmap, shell=True, fancy=True))
