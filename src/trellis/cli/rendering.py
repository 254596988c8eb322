from typing import Dict, Optional, Tuple

import typer

from trellis.common.messaging import protocols

# level -> (color, write to stderr)
_STYLES: Dict[str, Tuple[Optional[str], bool]] = {
    "debug": (typer.colors.BRIGHT_BLACK, False),
    "info": (typer.colors.BLUE, False),
    "success": (typer.colors.GREEN, False),
    "warning": (typer.colors.YELLOW, True),
    "error": (typer.colors.RED, True),
}


class CliRenderer(protocols.Renderer):
    """Prints bus messages; build notices only appear with `--verbose`."""

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def render(self, message: str, level: str):
        if level == "debug" and not self.verbose:
            return
        color, to_stderr = _STYLES.get(level, (None, False))
        typer.secho(message, fg=color, err=to_stderr)
