from rich.pretty import pprint

from argyle import *

install = command({
    "name": "install",
    "alias": ["i", "add"],
    "parameters": ["<package>", "[more...]"],
    "flags": {
        "saveDev": {"type": bool, "alias": "D", "description": "Save as a development dependency"},
    },
    "help": {"description": "Install a package"},
})


if __name__ == '__main__':
    pprint(cli({
        "name": "pkg",
        "version": "0.0.0",
        "parameters": ["[script]", "--", "[args...]"],
        "flags": {
            "debug": {"type": bool, "alias": "d", "description": "Verbose output"},
        },
        "commands": [install],
    }))
