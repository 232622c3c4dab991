"""
npm-like program with subcommands, aliases and an async command callback.

    python examples/npm.py install lodash --save-dev
    python examples/npm.py i rich
    python examples/npm.py run build -- --watch
    python examples/npm.py --help
"""
import asyncio

from rich.pretty import pprint

from argyle import cli, command


async def install(parsed):
    for package in parsed._.packages:
        await asyncio.sleep(0)
        print(f"installed {package}" + (" (dev)" if parsed.flags["saveDev"] else ""))


def run(parsed):
    pprint({"script": parsed._.script, "forwarded": parsed._["--"]})


commands = [
    command({
        "name": "install",
        "alias": ["i", "add"],
        "parameters": ["<packages...>"],
        "flags": {
            "saveDev": {"type": bool, "alias": "D", "description": "Save as a development dependency"},
            "registry": {"type": str, "placeholder": "<url>", "description": "Registry to install from"},
        },
        "help": {"description": "Install packages"},
    }, install),
    command({
        "name": "run",
        "parameters": ["<script>", "--", "[args...]"],
        "help": {"description": "Run a package script"},
    }, run),
]


async def main():
    parsed = cli({"name": "npm", "version": "10.0.0", "commands": commands})
    await parsed
    if parsed.command is None:
        parsed.show_help()


if __name__ == '__main__':
    asyncio.run(main())
