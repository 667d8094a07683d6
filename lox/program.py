from .ast       import Block
from .errors    import RuntimeFault
from .reporter  import Reporter
from .resolver  import resolve

### PROGRAM CLASS ###

# holds the top level statements of one unit (a file or a prompt line)
# run() resolves, stops at the checkpoint if any static error was
# reported, then interprets; runtime faults are reported, not raised

class Program:
    def __init__(self, block, reporter):
        self.block      = block     # Block
        self.reporter   = reporter  # Reporter

    def __iter__(self):
        return iter(self.block)

    def __len__(self):
        return len(self.block)

    def __getitem__(self, index):
        return self.block[index]

    def run(self, interpreter) -> bool:
        locals_ = resolve(self.block, self.reporter)
        if locals_ is None:
            return False

        try:
            interpreter.interpret(self.block, locals_)
        except RuntimeFault as e:
            self.reporter.runtime_error(e)
            return False

        return True

def run_source(source: str, parser, interpreter, reporter: Reporter) -> bool:
    """
    parse, resolve and interpret `source`; False if anything was reported
    """
    with reporter.checkpoint("parsing") as checkpoint:
        prgm = parser.parse(source)

    if not checkpoint or prgm is None:
        return False

    with reporter.checkpoint("running"):
        return prgm.run(interpreter)
