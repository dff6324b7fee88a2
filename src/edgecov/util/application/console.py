"""
Timing of assignment phases.

Phases (classify, search, fallback, verify) run inside nested scopes. Each
scope writes a begin line and an end line with its elapsed time, and the
time is kept in `Console.timings` under the tuple of enclosing scope names
so the CLI can report it after the run.
"""

import sys
import time
import contextlib

from edgecov.util.io.formatting import elapsedTime


class Console(object):
    """Nested phase timer writing progress lines to a stream.

    Attributes:
        out: Output stream (default: sys.stderr).
        stack: (name, start time) of every open scope, outermost first.
        timings: Dictionary mapping scope paths to elapsed seconds.
    """

    def __init__(self, out=None):
        self.out = sys.stderr if out is None else out
        self.stack = []
        self.timings = {}

    def path(self):
        return tuple(name for name, _ in self.stack)

    def label(self):
        """Current scope path as shown in output, e.g. "[ assign | search ]"."""
        return "[ %s ]" % " | ".join(self.path())

    def begin(self, name):
        self.stack.append((name, time.perf_counter()))
        self.output("begin %s" % self.label(), 0)

    def end(self):
        """Close the innermost scope and return its elapsed seconds."""
        elapsed = time.perf_counter() - self.stack[-1][1]
        self.timings[self.path()] = elapsed
        self.output("end   %s %s" % (self.label(), elapsedTime(elapsed)), 0)
        self.stack.pop()
        return elapsed

    @contextlib.contextmanager
    def scope(self, name):
        """Time the body of a with statement.

        Example:
            with console.scope("search"):
                result = searchParameters(classification, config)
        """
        self.begin(name)
        try:
            yield self
        finally:
            self.end()

    def output(self, s, tabs=1):
        """Write one line, indented by `tabs` tab characters."""
        self.out.write("\t" * tabs + s + "\n")
