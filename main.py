from rich.pretty import pprint

from cmdapp import *

__prog__ = "demo"

app = App(AppInfo("demo", "1.0.0", "cmdapp contributors", 2025, "Print the scanned options of ARG..."))

verbose = app.option("v", "verbose", descr="explain what is being done")
quiet = app.option("q", "quiet", conflicts=(verbose,), descr="print nothing but errors")
output = app.option("o", "out", takes_argument=True, descr="write the report to ARG")


if __name__ == '__main__':
    if (status := app.run()) == EXIT_SUCCESS and app.scanner.result.terminator is None:
        pprint(app.scanner.result)
    raise SystemExit(status)
