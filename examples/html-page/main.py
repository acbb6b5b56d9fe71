#!/usr/bin/env python3
"""
Render the sample page with the library API.

Equivalent CLI call:
    tqs render page.tqs --vars vars.yaml
"""

from pathlib import Path

from tqs import Template


def main():
    template = Template.from_file(Path(__file__).with_name("page.tqs"))
    print(template.render(title="Hello", name="world"), end="")


if __name__ == "__main__":
    main()
