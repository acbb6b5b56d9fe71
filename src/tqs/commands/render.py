"""Render command - render a template file with bindings"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer

from tqs.compiler import Template
from tqs.config import TqsConfig, load_config, load_vars
from tqs.exceptions import TqsError

from .utils import handle_error, parse_assignments

log = logging.getLogger(__name__)


def render_command(
    template_path: Path,
    assignments: Optional[List[str]] = None,
    vars_file: Optional[Path] = None,
    config_file: Optional[Path] = None,
    output: Optional[Path] = None,
) -> None:
    """Render `template_path` and print the result (or write it to `output`).

    Bindings are layered: config `vars`, then `--vars` file, then `--set`.
    """
    bindings = parse_assignments(assignments)

    try:
        config = load_config(config_file) if config_file else TqsConfig()
        file_vars = load_vars(vars_file) if vars_file else {}
        template = Template.from_file(template_path, config=config)
        log.info("Loaded template %s", template_path)

        missing = [
            name
            for name in template.identifiers()
            if name not in bindings and name not in file_vars and name not in config.vars
        ]
        if missing:
            log.warning("No binding for: %s", ", ".join(missing))

        result = template.render({**file_vars, **bindings})
    except (TqsError, OSError, UnicodeDecodeError) as e:
        handle_error(e)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(result, encoding="utf-8")
        log.info("Wrote %s", output)
    else:
        typer.echo(result, nl=False)
