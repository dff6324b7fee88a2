"""DOT rendering of an edge assignment.

Blocks are colored by how their incoming edges get a slot and every edge
is labeled with its slot, so collisions (which verify() rules out) and the
mix of inline hashes and table lookups can be inspected with Graphviz.
"""

from edgecov.analysis.edgehash.assignment import SOLVED, FALLBACK, SINGLE


def makeStr(s):
    """Escape and quote a string for use as a DOT identifier or label."""
    s = str(s).replace('"', '\\"')
    s = s.replace("\n", "\\n")
    return '"%s"' % s


class NodeStyle(object):
    solvedColor = "palegreen"
    fallbackColor = "lightsalmon"
    singleColor = "lightyellow"

    def __call__(self, assignment, block):
        method = assignment.method(block)
        label = "%s\\nkey=%d" % (makeStr(block)[1:-1], assignment.keys[block])
        if method == SOLVED:
            label += "\\n%s" % (assignment.solvedParams[block],)
            color = self.solvedColor
        elif method == FALLBACK:
            color = self.fallbackColor
        else:
            assert method == SINGLE, method
            color = self.singleColor
        return dict(label='"%s"' % label, shape="box", style="filled", fillcolor=color)


def formatAttrs(attrs):
    return ", ".join("%s=%s" % (k, v) for k, v in attrs.items())


def dumpAssignmentDot(assignment, name="EdgeAssignment", style=None):
    """Render the assignment as a DOT digraph string."""
    if style is None:
        style = NodeStyle()

    lines = ["digraph %s {" % makeStr(name), "    node [fontsize=8];"]
    ids = {}
    for i, block in enumerate(assignment.preds):
        ids[block] = "b%d" % i
        lines.append("    %s [%s];" % (ids[block], formatAttrs(style(assignment, block))))

    lines.append("")
    for (block, pred), slot in assignment.slots().items():
        if pred is None:
            start = "%s_entry" % ids[block]
            lines.append("    %s [shape=point];" % start)
        else:
            start = ids[pred]
        lines.append("    %s -> %s [label=\"%d\", fontsize=8];" % (start, ids[block], slot))

    lines.append("}")
    return "\n".join(lines)
