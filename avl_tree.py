import logging

from avl_config import get_config
from avl_engine import AVLEngine, AVLInvariantError, DUPLICATE_KEY, NOT_FOUND
from avl_node import Node

logger = logging.getLogger(__name__)


def byKey(dnode, dkey):
    # branch=dkey-node.key, the key itself never changes on the way down
    return dkey - dnode.key, dkey


class AVLTree(object):
    """
    AVL tree keyed by unique integers, every node also carries its subtree size.
    insert/delete return the number of rotations done, or DUPLICATE_KEY / NOT_FOUND
    """

    def __init__(self, validate = None):
        config = get_config()
        self.engine = AVLEngine()
        self.minNode = None
        self.maxNode = None
        self.validate = config["validate_after_write"] if validate is None else validate
        self.graphFormat = config["graph_format"]

    def empty(self):
        return self.engine.empty()

    def size(self):
        return self.engine.size()

    def getRoot(self):
        return self.engine.root

    def search(self, dkey):
        """
        return the value stored under dkey, None if dkey is not in the tree
        """
        dnode = self.__getNode(dkey)
        if dnode is None:
            return None
        return dnode.val

    def insert(self, dkey, dval):
        dnode, dparent, dbranch = self.engine.descend(byKey, dkey)
        if dnode is not None:
            logger.warning("key %s already exists, insert is invalidated", dkey)
            return DUPLICATE_KEY

        newNode = Node(dkey, dval)
        self.engine.attach(dparent, newNode, dbranch)
        rotations = self.engine.fixUpPath(dparent)

        if self.minNode is None or dkey < self.minNode.key:
            self.minNode = newNode
        if self.maxNode is None or dkey > self.maxNode.key:
            self.maxNode = newNode
        self.__afterWrite()
        return rotations

    def delete(self, dkey):
        dnode = self.__getNode(dkey)
        if dnode is None:
            logger.warning("no matching node found for key %s, delete is invalidated", dkey)
            return NOT_FOUND

        # extrema never have two children, so their neighbours survive the unlink untouched
        newMin = self.engine.successor(dnode) if dnode is self.minNode else self.minNode
        newMax = self.engine.predecessor(dnode) if dnode is self.maxNode else self.maxNode

        start = self.engine.unlink(dnode)
        rotations = self.engine.fixUpPath(start)

        self.minNode = newMin
        self.maxNode = newMax
        self.__afterWrite()
        return rotations

    def min(self):
        """
        value of the smallest key, None on an empty tree
        """
        return self.minNode.val if self.minNode is not None else None

    def max(self):
        """
        value of the largest key, None on an empty tree
        """
        return self.maxNode.val if self.maxNode is not None else None

    def keysToArray(self):
        return [dnode.key for dnode in self.engine.inOrder()]

    def infoToArray(self):
        return [dnode.val for dnode in self.engine.inOrder()]

    def checkInvariants(self):
        """
        engine invariants plus strict key order and the min/max cache
        """
        self.engine.checkInvariants()
        nodes = self.engine.inOrder()
        for a, b in zip(nodes, nodes[1:]):
            if not a.key < b.key:
                raise AVLInvariantError("keys out of order: {} before {}".format(a.key, b.key))
        if nodes:
            if self.minNode is not nodes[0] or self.maxNode is not nodes[-1]:
                raise AVLInvariantError("stale min/max cache")
        elif self.minNode is not None or self.maxNode is not None:
            raise AVLInvariantError("min/max cache set on an empty tree")

    def print(self):
        self.engine.print(self.graphFormat)

    def __getNode(self, dkey):
        return self.engine.descend(byKey, dkey)[0]

    def __afterWrite(self):
        if self.validate:
            self.checkInvariants()

    def __len__(self):
        return self.size()

    def __contains__(self, dkey):
        return self.__getNode(dkey) is not None

    def __iter__(self):
        return iter(self.keysToArray())

    def __str__(self):
        return str(self.engine)
