# Nodes and payload carrier shared by the keyed AVL tree and the ranked tree list


class Item(object):
    """
    immutable (key, info) pair handed back to callers of TreeList.retrieve
    """
    __slots__ = ("_key", "_info")

    def __init__(self, key, info):
        self._key = key
        self._info = info

    @property
    def key(self):
        return self._key

    @property
    def info(self):
        return self._info

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return self._key == other._key and self._info == other._info
        return False

    def __ne__(self, other):
        return not self.__eq__(other)

    def __hash__(self):
        return hash((self._key, self._info))

    def __repr__(self):
        return "Item({!r}, {!r})".format(self._key, self._info)


class Node(object):
    def __init__(self, key, val = None):
        self.key = key  # int; ordering key in AVLTree, opaque in TreeList
        self.val = val

        # a fresh node is always a leaf, absent children count as height -1
        self.height = 0
        self.size = 1

        # Nodes
        self.parent = None  # None means this node is the root node (or detached)
        self.left = None
        self.right = None

    def item(self):
        return Item(self.key, self.val)

    def getChild(self, branch):
        """
        branch<0: return left child, branch>0: return right child
        branch==0: return None
        """
        if branch < 0:
            return self.left
        elif branch > 0:
            return self.right
        else:
            return None

    def isLeaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        return "Node(key={!r}, val={!r}, height={}, size={})".format(
            self.key, self.val, self.height, self.size)


def heightOf(node):
    return node.height if node is not None else -1


def sizeOf(node):
    return node.size if node is not None else 0
