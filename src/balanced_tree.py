from typing import Any, Callable, Generic, Iterator, List, Optional, TypeVar

T = TypeVar('T')

Comparator = Callable[[Any, Any], int]

_MISSING = object()


class BalancedTree(Generic[T]):
    """AVL tree of unique values.

    Values are ordered by ``comparator(a, b)`` (negative, zero or positive,
    like ``a - b``) or by their natural ``<``/``>`` ordering when no comparator
    is given. Adding a value that compares equal to a stored one is a no-op.
    """

    class Node:
        def __init__(self, value: T) -> None:
            self.value: T = value
            self.left: Optional['BalancedTree.Node'] = None
            self.right: Optional['BalancedTree.Node'] = None
            self.height: int = 1

    def __init__(self, value: Any = _MISSING, *, comparator: Optional[Comparator] = None) -> None:
        self._comparator: Optional[Comparator] = comparator
        self._root: Optional[BalancedTree.Node] = None
        self._size: int = 0
        if value is not _MISSING:
            self._root = BalancedTree.Node(value)
            self._size = 1

    def _compare(self, a: T, b: T) -> int:
        if self._comparator is not None:
            return self._comparator(a, b)
        if a < b:
            return -1
        if a > b:
            return 1
        return 0

    def _get_height(self, node: Optional[Node]) -> int:
        if node is None:
            return 0
        return node.height

    def _update_height(self, node: Node) -> None:
        node.height = 1 + max(self._get_height(node.left), self._get_height(node.right))

    def _balance_factor(self, node: Optional[Node]) -> int:
        if node is None:
            return 0
        return self._get_height(node.left) - self._get_height(node.right)

    def _right_rotate(self, parent: Node) -> Node:
        left = parent.left
        assert left is not None
        subtree = left.right

        left.right = parent
        parent.left = subtree

        # parent is now below left, so its height goes first
        self._update_height(parent)
        self._update_height(left)

        return left

    def _left_rotate(self, parent: Node) -> Node:
        right = parent.right
        assert right is not None
        subtree = right.left

        right.left = parent
        parent.right = subtree

        self._update_height(parent)
        self._update_height(right)

        return right

    def _rebalance(self, node: Node) -> Node:
        self._update_height(node)
        balance = self._balance_factor(node)

        if balance > 1 and self._balance_factor(node.left) >= 0:
            return self._right_rotate(node)

        if balance < -1 and self._balance_factor(node.right) <= 0:
            return self._left_rotate(node)

        if balance > 1 and self._balance_factor(node.left) < 0:
            assert node.left is not None
            node.left = self._left_rotate(node.left)
            return self._right_rotate(node)

        if balance < -1 and self._balance_factor(node.right) > 0:
            assert node.right is not None
            node.right = self._right_rotate(node.right)
            return self._left_rotate(node)

        return node

    def _insert(self, node: Optional[Node], value: T) -> Node:
        if node is None:
            self._size += 1
            return BalancedTree.Node(value)

        cmp = self._compare(value, node.value)
        if cmp < 0:
            node.left = self._insert(node.left, value)
        elif cmp > 0:
            node.right = self._insert(node.right, value)
        else:
            return node

        return self._rebalance(node)

    def add(self, value: T) -> None:
        self._root = self._insert(self._root, value)

    def _find_min_node(self, node: Node) -> Node:
        while node.left is not None:
            node = node.left
        return node

    def _delete(self, node: Optional[Node], value: T) -> Optional[Node]:
        if node is None:
            return None

        cmp = self._compare(value, node.value)
        if cmp < 0:
            node.left = self._delete(node.left, value)
        elif cmp > 0:
            node.right = self._delete(node.right, value)
        else:
            if node.left is None:
                self._size -= 1
                return node.right
            if node.right is None:
                self._size -= 1
                return node.left
            successor = self._find_min_node(node.right)
            node.value = successor.value
            node.right = self._delete(node.right, successor.value)

        return self._rebalance(node)

    def remove(self, value: T) -> None:
        self._root = self._delete(self._root, value)

    def _find(self, value: T) -> Optional[Node]:
        node = self._root
        while node is not None:
            cmp = self._compare(value, node.value)
            if cmp < 0:
                node = node.left
            elif cmp > 0:
                node = node.right
            else:
                return node
        return None

    def exists(self, value: T) -> bool:
        return self._find(value) is not None

    def in_order(self) -> Iterator[T]:
        """Yield values smallest first (left, value, right)."""
        stack: List[BalancedTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.value
            node = node.right

    def pre_order(self) -> Iterator[T]:
        """Yield each value before its subtrees (value, left, right)."""
        if self._root is None:
            return
        stack: List[BalancedTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            yield node.value
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def post_order(self) -> Iterator[T]:
        """Yield each value after its subtrees (left, right, value)."""
        stack: List[BalancedTree.Node] = []
        last: Optional[BalancedTree.Node] = None
        node = self._root
        while stack or node is not None:
            if node is not None:
                stack.append(node)
                node = node.left
                continue
            top = stack[-1]
            if top.right is not None and top.right is not last:
                node = top.right
            else:
                yield top.value
                last = stack.pop()

    def in_order_traversal(self, visit: Callable[[T], Any]) -> None:
        for value in self.in_order():
            visit(value)

    def pre_order_traversal(self, visit: Callable[[T], Any]) -> None:
        for value in self.pre_order():
            visit(value)

    def post_order_traversal(self, visit: Callable[[T], Any]) -> None:
        for value in self.post_order():
            visit(value)

    def min(self) -> T:
        if self._root is None:
            raise ValueError("min from empty tree")
        return self._find_min_node(self._root).value

    def max(self) -> T:
        if self._root is None:
            raise ValueError("max from empty tree")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.value

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def height(self) -> int:
        return self._get_height(self._root)

    def _is_balanced(self, node: Optional[Node]) -> bool:
        if node is None:
            return True
        if abs(self._balance_factor(node)) > 1:
            return False
        return self._is_balanced(node.left) and self._is_balanced(node.right)

    def is_balanced(self) -> bool:
        return self._is_balanced(self._root)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, value: T) -> bool:
        return self.exists(value)

    def __iter__(self) -> Iterator[T]:
        return self.in_order()

    def __repr__(self) -> str:
        return f"BalancedTree({list(self.in_order())})"

    def __str__(self) -> str:
        return f"BalancedTree(size={self._size}, height={self.height()})"
