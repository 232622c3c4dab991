"""
esbuild-like help customization: "--flag=<value>" style flags, a custom node
type and a trimmed help document.

    python examples/esbuild.py --help
"""
from argyle import cli


def render(nodes, renderers):
    renderers.flag_operator = lambda: "="
    renderers.override(footer=lambda self, data: self.bold(data))
    nodes = [node for node in nodes if node.id != "name"]
    nodes.append({"type": "footer", "data": "Documentation: https://esbuild.github.io/"})
    return renderers.render(nodes)


if __name__ == '__main__':
    cli({
        "name": "esbuild",
        "version": "0.20.0",
        "parameters": ["[entry points...]"],
        "flags": {
            "bundle": {"type": bool, "description": "Bundle all dependencies into the output files"},
            "minify": {"type": bool, "description": "Minify the output"},
            "outdir": {"type": str, "placeholder": "<dir>", "description": "The output directory"},
            "target": {"type": [str], "description": "Environment target (e.g. es2017, chrome58)"},
            "sourcemap": {"type": bool, "default": False, "description": "Emit a source map"},
        },
        "help": {
            "description": "An extremely fast JavaScript bundler",
            "examples": ["esbuild app.ts --bundle --outdir=dist", "esbuild app.ts --minify --target=es2017"],
            "render": render,
        },
    })
