import logging

from avl_config import get_config
from avl_engine import AVLEngine, INDEX_OUT_OF_RANGE
from avl_node import Node, sizeOf

logger = logging.getLogger(__name__)


def byRank(dnode, rank):
    """
    order-statistic step: rank is 1-based inside the current subtree
    """
    leftSize = sizeOf(dnode.left)
    if rank == leftSize + 1:
        return 0, rank
    if rank > leftSize + 1:
        return 1, rank - leftSize - 1
    return -1, rank


class TreeList(object):
    """
    List ADT over a ranked AVL tree: positions are in-order ranks, keys are never compared.
    retrieve/insert/delete by index in O(log n)
    """

    def __init__(self, validate = None):
        config = get_config()
        self.engine = AVLEngine()
        self.validate = config["validate_after_write"] if validate is None else validate
        self.graphFormat = config["graph_format"]

    def empty(self):
        return self.engine.empty()

    def size(self):
        return self.engine.size()

    def retrieve(self, i):
        """
        Item at index i (0-based), None if i is out of [0, size)
        """
        if not self.__validForRetrieveAndDelete(i):
            logger.warning("index %s out of range for retrieve (size %d)", i, self.size())
            return None
        return self.__getNodeByIndex(i).item()

    def insert(self, i, k, s):
        """
        put item (k, s) at index i, shifting the item at i and after it one place to the right.
        returns 0, or INDEX_OUT_OF_RANGE if i is out of [0, size]
        """
        if not self.__validForInsert(i):
            logger.warning("index %s out of range for insert (size %d)", i, self.size())
            return INDEX_OUT_OF_RANGE

        newNode = Node(k, s)
        if i == self.size():
            # insert as last: right child of the current maximum, or the new root
            self.engine.attach(self.engine.maxInSubtree(self.engine.root), newNode, 1)
        else:
            current = self.__getNodeByIndex(i)
            if current.left is None:
                self.engine.attach(current, newNode, -1)
            else:
                # in-order predecessor of current, structurally without a right child
                self.engine.attach(self.engine.maxInSubtree(current.left), newNode, 1)
        self.engine.fixUpPath(newNode.parent)
        self.__afterWrite()
        return 0

    def delete(self, i):
        """
        remove the item at index i; returns 0, or INDEX_OUT_OF_RANGE if i is out of [0, size)
        """
        if not self.__validForRetrieveAndDelete(i):
            logger.warning("index %s out of range for delete (size %d)", i, self.size())
            return INDEX_OUT_OF_RANGE
        start = self.engine.unlink(self.__getNodeByIndex(i))
        self.engine.fixUpPath(start)
        self.__afterWrite()
        return 0

    def toArray(self):
        return [dnode.item() for dnode in self.engine.inOrder()]

    def checkInvariants(self):
        self.engine.checkInvariants()

    def print(self):
        self.engine.print(self.graphFormat)

    def __getNodeByIndex(self, i):
        # index i holds rank i + 1
        return self.engine.descend(byRank, i + 1)[0]

    def __validForRetrieveAndDelete(self, i):
        return 0 <= i < self.size()

    def __validForInsert(self, i):
        return 0 <= i <= self.size()

    def __afterWrite(self):
        if self.validate:
            self.checkInvariants()

    def __len__(self):
        return self.size()

    def __iter__(self):
        return iter(self.toArray())

    def __str__(self):
        return str(self.engine)
