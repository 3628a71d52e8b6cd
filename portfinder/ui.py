import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()
err_console = Console(stderr=True)

class FinderUI:
    """
    Renders finder results as plain text or JSON.
    Results go to stdout, errors and logs to stderr.
    """
    def __init__(self, json_output: bool = False):
        self.console = console
        self.err_console = err_console
        self.json_output = json_output

    def _plain(self, text, error=False):
        target = self.err_console if error else self.console
        target.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

    def _json(self, data, error=False):
        target = self.err_console if error else self.console
        target.print_json(data=data, indent=None, highlight=False)

    def show_check(self, port, available):
        if self.json_output:
            self._json({"port": port, "available": available})
        else:
            self._plain(f"Port {port} is {'available' if available else 'in use'}")

    def show_port(self, port):
        if self.json_output:
            self._json({"port": port})
        else:
            self._plain(str(port))

    def show_ports(self, ports):
        if self.json_output:
            self._json({"ports": ports})
        else:
            self._plain(" ".join(str(p) for p in ports))

    def show_error(self, message, code=None, details=None):
        if self.json_output:
            error = {"message": message}
            if code is not None:
                error["code"] = code
                error["details"] = details
            self._json({"error": error}, error=True)
        else:
            self._plain(f"Error: {message}", error=True)

def configure_logging(verbose: bool = False):
    """Routes library debug logs to stderr through rich. Silent unless verbose."""
    logger = logging.getLogger("portfinder")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    handler = RichHandler(console=err_console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
