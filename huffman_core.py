# filename: huffman_core.py

import heapq
import itertools
import logging
from collections import Counter

from huffman_errors import MalformedArtifactError

logger = logging.getLogger(__name__)

# Tree section tags, one byte per node in pre-order.
TAG_INTERNAL = 0x00
TAG_LEAF = 0x01
TAG_PLACEHOLDER = 0x02


class HuffmanNode:
    """Leaf (byte value, no children) or internal node (two children).

    A leaf with char None is the placeholder that pads a single-symbol tree.
    """

    __slots__ = ("char", "freq", "left", "right")

    def __init__(self, char, freq, left=None, right=None):
        self.char = char
        self.freq = freq
        self.left = left
        self.right = right

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    @property
    def is_placeholder(self):
        return self.is_leaf and self.char is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(char={self.char!r}, freq={self.freq})"
        return f"HuffmanNode(freq={self.freq}, left={self.left!r}, right={self.right!r})"


def count_frequencies(data):
    """Map each byte value in data to its occurrence count."""
    return dict(Counter(data))


def merge_frequencies(*tables):
    """Sum frequency tables counted over separate shards of one input."""
    total = Counter()
    for table in tables:
        total.update(table)
    return dict(total)


class NodeQueue:
    """Min-heap of nodes keyed on (weight, insertion sequence).

    Equal weights come out in the order they were pushed, which is what makes
    tree construction reproducible.
    """

    def __init__(self):
        self._heap = []
        self._sequence = itertools.count()

    def push(self, node):
        heapq.heappush(self._heap, (node.freq, next(self._sequence), node))

    def pop(self):
        if not self._heap:
            raise IndexError("pop from empty NodeQueue")
        return heapq.heappop(self._heap)[2]

    def __len__(self):
        return len(self._heap)


class HuffmanLogic:
    def build_tree(self, freqs):
        """Build the Huffman tree for a non-empty frequency mapping.

        Leaves enter the queue in ascending byte order. Each merge pops two
        nodes; the first popped becomes the right child and the second the
        left child of the new internal node. Putting the lighter node on the
        right is what gives "aab" the codes a="0", b="1".
        """
        if not freqs:
            raise ValueError("cannot build a tree from an empty frequency table")

        queue = NodeQueue()
        for char in sorted(freqs):
            queue.push(HuffmanNode(char, freqs[char]))

        if len(queue) == 1:
            # A lone leaf would have a zero-length code.
            leaf = queue.pop()
            logger.debug("single symbol %d, padding tree with placeholder", leaf.char)
            return HuffmanNode(None, leaf.freq, leaf, HuffmanNode(None, 0))

        while len(queue) > 1:
            right = queue.pop()
            left = queue.pop()
            queue.push(HuffmanNode(None, left.freq + right.freq, left, right))

        root = queue.pop()
        logger.debug("built tree over %d symbols, weight %d", len(freqs), root.freq)
        return root

    def generate_codes(self, node):
        """Walk the tree, left = '0' and right = '1', and map byte -> code."""
        codes = {}
        if node is None:
            return codes
        stack = [(node, "")]
        while stack:
            current, code = stack.pop()
            if current.is_leaf:
                if current.char is not None:
                    codes[current.char] = code
                continue
            stack.append((current.right, code + "1"))
            stack.append((current.left, code + "0"))
        return codes

    def serialize_tree(self, node):
        """Flatten the tree shape in pre-order; weights are not kept."""
        out = bytearray()
        if node is None:
            return bytes(out)
        stack = [node]
        while stack:
            current = stack.pop()
            if current.is_placeholder:
                out.append(TAG_PLACEHOLDER)
            elif current.is_leaf:
                out.append(TAG_LEAF)
                out.append(current.char)
            else:
                out.append(TAG_INTERNAL)
                stack.append(current.right)
                stack.append(current.left)
        return bytes(out)

    def parse_tree(self, data):
        """Rebuild a tree from serialize_tree output.

        Returns None for an empty section. Raises MalformedArtifactError for
        anything that is not a well-formed prefix tree.
        """
        if not data:
            return None

        root = None
        pending = []  # internal nodes still missing a child
        seen = set()
        placeholders = 0
        pos = 0
        while True:
            if pos >= len(data):
                raise MalformedArtifactError("tree section ends mid-tree")
            tag = data[pos]
            pos += 1
            if tag == TAG_INTERNAL:
                node = HuffmanNode(None, 0)
            elif tag == TAG_LEAF:
                if pos >= len(data):
                    raise MalformedArtifactError("leaf tag without symbol byte")
                char = data[pos]
                pos += 1
                if char in seen:
                    raise MalformedArtifactError(f"symbol {char} appears twice in tree")
                seen.add(char)
                node = HuffmanNode(char, 0)
            elif tag == TAG_PLACEHOLDER:
                placeholders += 1
                node = HuffmanNode(None, 0)
            else:
                raise MalformedArtifactError(f"unknown tree tag 0x{tag:02x}")

            if root is None:
                root = node
            else:
                parent = pending[-1]
                if parent.left is None:
                    parent.left = node
                else:
                    parent.right = node
                    pending.pop()
            if tag == TAG_INTERNAL:
                pending.append(node)
            if not pending:
                break

        if pos != len(data):
            raise MalformedArtifactError("trailing bytes after tree section")
        if root.is_leaf:
            raise MalformedArtifactError("tree root must be an internal node")
        if placeholders:
            # Only the padded single-symbol shape may carry a placeholder.
            if not (placeholders == 1 and len(seen) == 1
                    and root.left.is_leaf and root.right.is_placeholder):
                raise MalformedArtifactError("placeholder outside single-symbol tree")
        return root
