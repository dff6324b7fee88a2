"""
Tests for JSON loading of graphs and dumping of assignments.
"""

import json
import os
import random
import tempfile
import unittest

from edgecov.analysis.cfg.serialize import graphFromDict, graphToDict, loadGraph, dumpAssignment
from edgecov.analysis.cfg.dump import dumpAssignmentDot
from edgecov.application.errors import InvalidGraphInput
from edgecov.application.pipeline import assignEdges
from edgecov.config import SearchConfig


class TestGraphFromDict(unittest.TestCase):
    def testEdgeForm(self):
        g = graphFromDict({"blocks": ["a", "b", "c"], "edges": [["a", "c"], ["b", "c"]]})
        self.assertEqual(g.predecessors("c"), ("a", "b"))

    def testPredecessorForm(self):
        g = graphFromDict({"predecessors": {"a": [], "b": ["a", "b"]}})
        self.assertEqual(g.blocks, ["a", "b"])
        self.assertEqual(g.predecessors("b"), ("a", "b"))

    def testListBlockIdsBecomeTuples(self):
        g = graphFromDict({"blocks": [["f", 0], ["f", 1]], "edges": [[["f", 0], ["f", 1]]]})
        self.assertEqual(g.predecessors(("f", 1)), (("f", 0),))

    def testRoundTripThroughDict(self):
        data = {"blocks": [1, 2, 3], "edges": [[1, 2], [2, 3], [1, 3]]}
        g = graphFromDict(data)
        self.assertEqual(graphFromDict(graphToDict(g)).prev, g.prev)

    def testMalformed(self):
        for data in (
            [],
            {"blocks": ["a"]},
            {"edges": [["a", "b"]]},
            {"blocks": "ab", "edges": []},
            {"blocks": ["a"], "edges": {}},
            {"predecessors": []},
            {"predecessors": {"a": "b"}},
            {"blocks": ["a"], "edges": [["a", "b"]]},
            {"blocks": ["A", "C"], "edges": ["AC"]},
            {"blocks": [1, True, 2], "edges": [[1, 2], [True, 2]]},
            {"blocks": [1, 2], "edges": [[1.0, 2]]},
        ):
            with self.assertRaises(InvalidGraphInput, msg=repr(data)):
                graphFromDict(data)


class TestFiles(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".json")
        os.close(fd)

    def tearDown(self):
        os.remove(self.path)

    def testLoadGraph(self):
        with open(self.path, "w") as f:
            json.dump({"blocks": ["a", "b"], "edges": [["a", "b"]]}, f)
        g = loadGraph(self.path)
        self.assertEqual(list(g.edges()), [("a", "b")])

    def testLoadInvalidJson(self):
        with open(self.path, "w") as f:
            f.write("{not json")
        with self.assertRaises(InvalidGraphInput):
            loadGraph(self.path)


class TestDumpAssignment(unittest.TestCase):
    def setUp(self):
        g = graphFromDict({"blocks": ["A", "B", "C"], "edges": [["A", "C"], ["B", "C"]]})
        self.assignment = assignEdges(g, SearchConfig(mapSizePow2=6),
                                      keys={"A": 5, "B": 9, "C": 20})

    def testJson(self):
        data = json.loads(dumpAssignment(self.assignment))
        self.assertEqual(data["arraySize"], 64)
        self.assertEqual(data["keys"], [["A", 5], ["B", 9], ["C", 20]])
        self.assertEqual(data["solvedParams"], [["C", [1, 1, 1]]])
        self.assertEqual(data["fallbackTable"], [])
        self.assertEqual(data["singleTable"], [[5, 0], [9, 1]])
        self.assertEqual(data["summary"]["edges"], 4)
        self.assertTrue(data["stats"]["converged"])

    def testDot(self):
        dot = dumpAssignmentDot(self.assignment)
        self.assertTrue(dot.startswith('digraph "EdgeAssignment" {'))
        self.assertIn('b0 -> b2 [label="9"', dot)
        self.assertIn('b1 -> b2 [label="15"', dot)
        self.assertIn("b0_entry -> b0", dot)
        self.assertIn("palegreen", dot)
        self.assertTrue(dot.endswith("}"))


if __name__ == "__main__":
    unittest.main()
