"""
cmdapp application layer: register options, run a scan, map the outcome to an exit status.

What this module provides
- App: owns a Registry and a Scanner and wires them to program metadata.
  • option(...): register an option (see Registry.register).
  • run(argv): scan and return EXIT_SUCCESS / EXIT_FAILURE.
  • main(argv): run and exit the process with that status.
  • trigger(fault): surface a fault with this app's render options.

Shell mode
- shell=True (default): faults are rendered to stderr via rich and run()
  returns EXIT_FAILURE.
- shell=False: faults are raised to the caller.

Quick start
    from cmdapp import App, AppInfo

    app = App(AppInfo("tool", "1.0", "Jane Doe", 2021, "do things"))
    verbose = app.option("v", "verbose", descr="talk more")
    output = app.option("o", "out", takes_argument=True, descr="write here")

    if __name__ == "__main__":
        app.main()
"""
import copy
import logging
import sys

from .faults import *
from .registry import Registry
from .render import AppInfo, render_help, render_version
from .scanner import Scanner, ScanMode
from .utils import *

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class App:
    """
    Command-line application: a registry, a scanner and run-time rendering flags.

    Parameters
    - info: AppInfo with program metadata for help/version output.
    - mode: ScanMode for single-dash tokens, fixed for the app's lifetime.
    - shell: render faults (True) or raise them (False).
    - fancy: wrap rendered output in rich panels.
    - colorful: enable colors in rendered output.
    """

    def __init__(self, info=Unset, mode=ScanMode.SHORTARG, /, *, shell=True, fancy=False, colorful=True):
        for name, flag in (("shell", shell), ("fancy", fancy), ("colorful", colorful)):
            if not isinstance(flag, bool):
                raise TypeError(f"app {name!r} must be a boolean")

        self._info = coalesce(info, AppInfo())
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful
        self._registry = Registry()
        self._scanner = Scanner(
            self._registry,
            mode,
            self._info,
            helper=self._helper,
            versioner=self._versioner,
        )

    @property
    def info(self):
        return self._info

    @property
    def registry(self):
        return self._registry

    @property
    def scanner(self):
        return self._scanner

    @property
    def shell(self):
        return self._shell

    @property
    def fancy(self):
        return self._fancy

    @property
    def colorful(self):
        return self._colorful

    @property
    def arguments(self):
        """positional arguments of the latest successful scan, None before it."""
        if (result := self._scanner.result) is None:
            return None
        return result.arguments

    def option(self, *args, **kwargs):
        """register an option; arguments are forwarded to Registry.register()."""
        return self._registry.register(*args, **kwargs)

    def _helper(self, registry, info, program):
        render_help(registry, info, program=program, colorful=self._colorful, fancy=self._fancy)

    def _versioner(self, info, program):
        render_version(info, program=program, colorful=self._colorful, fancy=self._fancy)

    def trigger(self, fault, /, **options):
        """merge this app's render flags into the fault and surface it."""
        if (
                not hasattr(fault, "__trigger__") or
                not callable(fault.__trigger__) or
                not hasattr(fault, "__replace__") or
                not callable(fault.__replace__)
        ):
            raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
        trigger(
            copy.replace(fault, **options),
            tool=self,
            program=self._scanner.program,
            shell=self._shell,
            fancy=self._fancy,
            colorful=self._colorful,
        )

    def run(self, argv=Unset, /):
        """
        scan argv (sys.argv by default) and return the process exit status.

        - success or a --help/--version short-circuit → EXIT_SUCCESS
        - a fault in shell mode → rendered, EXIT_FAILURE
        - a fault outside shell mode → raised
        """
        argv = coalesce(argv, sys.argv)
        try:
            result = self._scanner.scan(argv)
        except ScanError as fault:
            self.trigger(fault)
            return EXIT_FAILURE
        if result.terminator:
            logger.debug("terminated by %s", result.terminator)
        return EXIT_SUCCESS

    def main(self, argv=Unset, /):
        """run and exit the process with the resulting status."""
        sys.exit(self.run(argv))

    def __repr__(self):
        return f"app(program={self._info.program!r}, mode={self._scanner.mode.value!r}, options={len(self._registry)})"


__all__ = (
    "App",
    "EXIT_SUCCESS",
    "EXIT_FAILURE",
)
