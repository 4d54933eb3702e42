"""Tests for configuration and logging setup."""

import logging
import os
import unittest
from unittest import mock

from avl_config import LOGGERS, get_config, setup_logging
from avl_tree import AVLTree
from tree_list import TreeList


class ConfigTestCase(unittest.TestCase):

    def test_defaults(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            config = get_config()
        self.assertFalse(config["debug"])
        self.assertFalse(config["validate_after_write"])
        self.assertEqual(config["log_level"], "WARNING")
        self.assertEqual(config["graph_format"], "png")

    def test_debug_turns_on_validation_and_debug_logs(self):
        with mock.patch.dict(os.environ, {"AVL_DEBUG": "1"}, clear=True):
            config = get_config()
        self.assertTrue(config["debug"])
        self.assertTrue(config["validate_after_write"])
        self.assertEqual(config["log_level"], "DEBUG")

    def test_explicit_overrides(self):
        env = {"AVL_DEBUG": "yes", "AVL_VALIDATE": "off",
               "AVL_LOG_LEVEL": "info", "AVL_GRAPH_FORMAT": "svg"}
        with mock.patch.dict(os.environ, env, clear=True):
            config = get_config()
        self.assertFalse(config["validate_after_write"])
        self.assertEqual(config["log_level"], "INFO")
        self.assertEqual(config["graph_format"], "svg")

    def test_wrappers_read_config(self):
        with mock.patch.dict(os.environ, {"AVL_VALIDATE": "true", "AVL_GRAPH_FORMAT": "svg"}, clear=True):
            tree = AVLTree()
            lst = TreeList()
            forced = AVLTree(validate=False)
        self.assertTrue(tree.validate)
        self.assertTrue(lst.validate)
        self.assertFalse(forced.validate)
        self.assertEqual(tree.graphFormat, "svg")


class LoggingTestCase(unittest.TestCase):

    def tearDown(self):
        for name in LOGGERS:
            logger = logging.getLogger(name)
            logger.handlers.clear()
            logger.setLevel(logging.NOTSET)
            logger.propagate = True

    def test_setup_is_idempotent(self):
        setup_logging("INFO")
        loggers = setup_logging("DEBUG")
        self.assertEqual([l.name for l in loggers], list(LOGGERS))
        for logger in loggers:
            self.assertEqual(len(logger.handlers), 1)
            self.assertEqual(logger.level, logging.DEBUG)
            self.assertFalse(logger.propagate)

    def test_rotations_are_logged_at_debug(self):
        setup_logging("DEBUG")
        tree = AVLTree()
        with self.assertLogs("avl_engine", level="DEBUG") as captured:
            for k in [1, 2, 3]:
                tree.insert(k, str(k))
        self.assertTrue(any("RR rotation at 1" in line for line in captured.output))


if __name__ == "__main__":
    unittest.main()
