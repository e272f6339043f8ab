"""
IPython magic commands for symcse.

Usage in a Jupyter notebook:
    # Load the extension
    %load_ext symcse

    # One formula per line, several are stacked into a column
    %%cse
    a*x^2 + b
    c*x^2 + d

    # Keep the CseResult for later use
    %%cse res -p t -n 4 -r y
    (a + 2i)*x + z

Options:
    %%cse [VAR_NAME] [-p PREFIX] [-n NCSE] [-P MAX_POWER] [-r RESULT_NAME]

    -p, --prefix PREFIX         Prefix of temporaries (default tmp)
    -n, --ncse NCSE             Maximum extraction passes (default 10)
    -P, --max-power MAX_POWER   Highest power chained (default 10)
    -r, --result-name NAME      Name of the result variable (default r)

For help in Jupyter: %%cse?
"""

from IPython.core.magic import Magics, cell_magic, magics_class
from IPython.core.magic_arguments import argument, magic_arguments, parse_argstring

from .cli import format_report
from .config import CseOptions
from .driver import transform


def cell_formulas(cell: str) -> list:
    """Non-empty lines of a cell, ``#`` comments dropped."""
    formulas = []
    for line in cell.splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            formulas.append(line)
    return formulas


@magics_class
class CseMagics(Magics):
    """IPython magics for symcse."""

    @magic_arguments()
    @argument(
        "var_name",
        type=str,
        nargs="?",
        default=None,
        help="Variable name to store the CseResult",
    )
    @argument("-p", "--prefix", type=str, default="tmp", help="Prefix of temporaries")
    @argument("-n", "--ncse", type=int, default=10, help="Maximum extraction passes")
    @argument("-P", "--max-power", type=int, default=10, help="Highest power chained")
    @argument("-r", "--result-name", type=str, default=None, help="Name of the result variable")
    @cell_magic
    def cse(self, line, cell):
        """
        Print MATLAB and C code for the formulas in the cell.

        Usage:
            %%cse [VAR_NAME] [-p PREFIX] [-n NCSE] [-P MAX_POWER] [-r RESULT_NAME]
        """
        args = parse_argstring(self.cse, line)
        options = CseOptions(
            name_prefix=args.prefix,
            max_cse_iterations=args.ncse,
            max_power=args.max_power,
            result_name=args.result_name,
        )
        formulas = cell_formulas(cell)
        result = transform(formulas[0] if len(formulas) == 1 else formulas, options)
        print(format_report("\n".join(formulas), result))

        if args.var_name:
            self.shell.user_ns[args.var_name] = result


def load_ipython_extension(ipython):
    """Load the symcse magic extension."""
    ipython.register_magics(CseMagics)


def unload_ipython_extension(ipython):
    """Unload the symcse magic extension."""
    pass
