# Shared AVL balance engine: rotations, fix-up walks and structural unlinking.
# Knows nothing about key order or rank order, the wrappers (AVLTree, TreeList)
# decide where a node goes and hand the engine a structural target.

import logging

from graphviz import Digraph
from IPython.display import Image, display

from avl_node import heightOf, sizeOf

logger = logging.getLogger(__name__)

# Return codes

DUPLICATE_KEY = -1
NOT_FOUND = -2
INDEX_OUT_OF_RANGE = -3


class AVLInvariantError(AssertionError):
    """
    raised by AVLEngine.checkInvariants when the structure is corrupted
    """
    pass


class AVLEngine(object):

    def __init__(self):
        """
        Initializes an empty engine. root is None until the first attach.
        rotations counts every single rotation performed over the engine's lifetime.
        """
        self.root = None
        self.rotations = 0

    def size(self):
        return sizeOf(self.root)

    def empty(self):
        return self.root is None

    # ---------- locating ----------

    def descend(self, probe, target):
        """
        walk down from the root steered by probe(node, target) -> (branch, target)
        branch==0 stops on node, branch<0 goes left, branch>0 goes right
        returns (found node or None, last visited node, last branch taken)
        """
        dnode = self.root
        dparent = None
        dbranch = 0
        while dnode is not None:
            dbranch, target = probe(dnode, target)
            if dbranch == 0:
                return dnode, dparent, dbranch
            dparent = dnode
            dnode = dnode.getChild(dbranch)
        return None, dparent, dbranch

    def minInSubtree(self, origin):
        """
        return the left-most node under origin (including origin), None for an empty subtree
        """
        if origin is None:
            return None
        dnode = origin
        while dnode.left is not None:
            dnode = dnode.left
        return dnode

    def maxInSubtree(self, origin):
        """
        return the right-most node under origin (including origin), None for an empty subtree
        """
        if origin is None:
            return None
        dnode = origin
        while dnode.right is not None:
            dnode = dnode.right
        return dnode

    def successor(self, node):
        if node.right is not None:
            return self.minInSubtree(node.right)
        dnode = node
        while dnode.parent is not None and dnode.parent.right is dnode:
            dnode = dnode.parent
        return dnode.parent

    def predecessor(self, node):
        if node.left is not None:
            return self.maxInSubtree(node.left)
        dnode = node
        while dnode.parent is not None and dnode.parent.left is dnode:
            dnode = dnode.parent
        return dnode.parent

    def inOrder(self):
        """
        materialized in-order list of nodes, iterative so deep trees don't hit the recursion limit
        """
        nodes = []
        stack = []
        dnode = self.root
        while stack or dnode is not None:
            while dnode is not None:
                stack.append(dnode)
                dnode = dnode.left
            dnode = stack.pop()
            nodes.append(dnode)
            dnode = dnode.right
        return nodes

    # ---------- splicing ----------

    def attach(self, parent, node, branch):
        """
        hang a detached leaf under parent on the branch side,
        or make it the root when parent is None
        """
        node.parent = parent
        if parent is None:
            self.root = node
        elif branch < 0:
            parent.left = node
        else:
            parent.right = node

    def unlink(self, node):
        """
        structurally remove node from the tree and return the node
        from which fixUpPath has to start (None when node was a root
        with at most one child)
        """
        if node.left is not None and node.right is not None:
            start = self.__unlinkWithTwoChildren(node)
        else:
            dparent = node.parent
            child = node.left if node.left is not None else node.right
            self.__replaceInParent(node, child)
            if child is not None:
                child.parent = dparent
            start = dparent
        node.parent = node.left = node.right = None
        return start

    def __unlinkWithTwoChildren(self, node):
        """
        splice the in-order successor into node's slot.
        if the successor is node.right it keeps its right subtree and the walk starts
        from the successor itself, otherwise from the successor's former parent
        """
        succ = self.minInSubtree(node.right)
        if succ is node.right:
            start = succ
        else:
            start = succ.parent
            # succ has no left child: its right subtree takes its old slot
            succParent = succ.parent
            succParent.left = succ.right
            if succ.right is not None:
                succ.right.parent = succParent
            succ.right = node.right
            node.right.parent = succ

        self.__replaceInParent(node, succ)
        succ.parent = node.parent
        succ.left = node.left
        node.left.parent = succ
        logger.debug("spliced successor %s into the slot of %s", succ.key, node.key)
        return start

    def __replaceInParent(self, node, newChild):
        dparent = node.parent
        if dparent is None:
            self.root = newChild
        elif dparent.left is node:
            dparent.left = newChild
        else:
            dparent.right = newChild

    # ---------- bookkeeping ----------

    def updateSize(self, node):
        node.size = 1 + sizeOf(node.left) + sizeOf(node.right)

    def updateHeight(self, node):
        node.height = 1 + max(heightOf(node.left), heightOf(node.right))

    def balanceFactor(self, node):
        return heightOf(node.left) - heightOf(node.right)

    # ---------- rotations ----------

    def rotateLeft(self, x):
        """
        base type: x.right becomes the subtree root, return it
        """
        y = x.right
        x.right = y.left
        if y.left is not None:
            y.left.parent = x
        self.__replaceInParent(x, y)
        y.parent = x.parent
        y.left = x
        x.parent = y

        # x is a child now, its values are needed for y
        self.updateSize(x)
        self.updateHeight(x)
        self.updateSize(y)
        self.updateHeight(y)
        self.rotations += 1
        return y

    def rotateRight(self, x):
        """
        base type: x.left becomes the subtree root, return it
        """
        y = x.left
        x.left = y.right
        if y.right is not None:
            y.right.parent = x
        self.__replaceInParent(x, y)
        y.parent = x.parent
        y.right = x
        x.parent = y

        self.updateSize(x)
        self.updateHeight(x)
        self.updateSize(y)
        self.updateHeight(y)
        self.rotations += 1
        return y

    def rotateLeftRight(self, node):
        """
        complex type: left-rotate node.left, then right-rotate node
        """
        self.rotateLeft(node.left)
        return self.rotateRight(node)

    def rotateRightLeft(self, node):
        """
        complex type: right-rotate node.right, then left-rotate node
        """
        self.rotateRight(node.right)
        return self.rotateLeft(node)

    def rebalanceAt(self, node):
        """
        check node's balance factor and rotate if it is +-2.
        a child with balance factor 0 (only possible after a delete) takes the single rotation
        returns the number of rotations done
        """
        bf = self.balanceFactor(node)
        if bf == 2:
            if self.balanceFactor(node.left) >= 0:
                logger.debug("LL rotation at %s", node.key)
                self.rotateRight(node)
                return 1
            logger.debug("LR rotation at %s", node.key)
            self.rotateLeftRight(node)
            return 2
        if bf == -2:
            if self.balanceFactor(node.right) <= 0:
                logger.debug("RR rotation at %s", node.key)
                self.rotateLeft(node)
                return 1
            logger.debug("RL rotation at %s", node.key)
            self.rotateRightLeft(node)
            return 2
        return 0

    def fixUpPath(self, start):
        """
        fix size and height from start up to the root (inclusive), rotating where needed.
        the walk moves on to the parent the node had before rebalancing,
        since a rotated subtree already carries correct values
        returns the total number of rotations
        """
        total = 0
        dnode = start
        while dnode is not None:
            dparent = dnode.parent
            self.updateSize(dnode)
            self.updateHeight(dnode)
            total += self.rebalanceAt(dnode)
            dnode = dparent
        if total:
            logger.debug("fix-up from %s performed %d rotation(s)",
                         start.key if start is not None else None, total)
        return total

    # ---------- validation ----------

    def checkInvariants(self):
        """
        verify parent links, size, height and balance for every node.
        raise AVLInvariantError on the first violation, return the node count otherwise
        """
        if self.root is not None and self.root.parent is not None:
            raise AVLInvariantError("root {!r} has a parent".format(self.root))

        def verify(dnode):
            # returns (height, size) of the subtree
            if dnode is None:
                return -1, 0
            for child in (dnode.left, dnode.right):
                if child is not None and child.parent is not dnode:
                    raise AVLInvariantError(
                        "broken parent link between {!r} and {!r}".format(dnode, child))
            hl, sl = verify(dnode.left)
            hr, sr = verify(dnode.right)
            if dnode.size != 1 + sl + sr:
                raise AVLInvariantError("wrong size at {!r}, expected {}".format(dnode, 1 + sl + sr))
            if dnode.height != 1 + max(hl, hr):
                raise AVLInvariantError("wrong height at {!r}, expected {}".format(dnode, 1 + max(hl, hr)))
            if abs(hl - hr) > 1:
                raise AVLInvariantError("unbalanced node {!r}, balance factor {}".format(dnode, hl - hr))
            return dnode.height, dnode.size

        return verify(self.root)[1]

    def snapshot(self):
        """
        nested tuple (key, val, height, size, left, right) of the whole structure
        """
        def shot(dnode):
            if dnode is None:
                return None
            return (dnode.key, dnode.val, dnode.height, dnode.size,
                    shot(dnode.left), shot(dnode.right))
        return shot(self.root)

    # ---------- rendering ----------

    def print(self, fmt = "png"):
        """
        render the tree with graphviz and display it
        """
        if self.root is None:
            print("Tree is empty!")
        else:
            G = buildGraph(self.root, fmt)
            display(Image(G.render()))

    def __str__(self):
        return strTree(self.root)


def buildGraph(droot, fmt = "png"):
    """
    graphviz Digraph of the subtree; nodes are named by identity since
    TreeList keys are not unique. left edges blue, right edges red
    """
    G = Digraph(format=fmt)

    def addNode(dnode, color=None):
        G.node(str(id(dnode)), "{} {}".format(dnode.key, dnode.val))
        if color is not None:
            G.edge(str(id(dnode.parent)), str(id(dnode)), color=color)
        if dnode.left is not None:
            addNode(dnode.left, color='blue')
        if dnode.right is not None:
            addNode(dnode.right, color='red')

    if droot is not None:
        addNode(droot)
    return G


def strTree(droot):
    """
    perform a pretty print, stringified
    """
    stree = ""

    def DFSNode(dnode, dstree):
        if dnode is None:
            dstree += "·"
            return dstree
        else:
            dstree += str(dnode.val)
        if dnode.height > 0:
            dstree += "("
            dstree = DFSNode(dnode.left, dstree)
            dstree += ","
            dstree = DFSNode(dnode.right, dstree)
            dstree += ")"
        return dstree

    stree = DFSNode(droot, stree)
    return stree
