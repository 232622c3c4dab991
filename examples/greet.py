"""
Greet someone, optionally more than once.

    python examples/greet.py Ada --times 2 --loud
    python examples/greet.py --help
"""
from argyle import cli


def greet(parsed):
    greeting = f"Hello, {parsed._.name}!"
    if parsed.flags["loud"]:
        greeting = greeting.upper()
    for _ in range(parsed.flags["times"]):
        print(greeting)


if __name__ == '__main__':
    cli({
        "name": "greet",
        "version": "1.0.0",
        "parameters": ["<name>"],
        "flags": {
            "times": {"type": int, "alias": "t", "default": 1, "description": "Number of greetings"},
            "loud": {"type": bool, "description": "Shout the greeting"},
        },
        "help": {"examples": ["greet Ada", "greet Ada --times 3 --loud"]},
    }, greet)
