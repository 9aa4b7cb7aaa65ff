import logging
import typing

from .errors import MissingTransition, UnexpectedEndOfInput, UnexpectedToken
from .symbols import EPSILON, SENTINEL, production_str
from .table import ParseTable


class Tree:
    """A node in a concrete syntax tree.

    `name` is the grammar symbol this node stands for. Nonterminals have one
    child per symbol of the production they were expanded with (or a single
    epsilon child for the empty production); terminals are leaves.

    Two trees are equal if their names and children are equal. Parents are
    not compared.
    """

    name: str
    children: list["Tree"]
    parent: "Tree | None"

    def __init__(self, name: str, parent: "Tree | None" = None):
        self.name = name
        self.children = []
        self.parent = None
        if parent is not None:
            parent.add_child(self)

    def add_child(self, node: "Tree"):
        """Append `node` to our children. Adding a node that is already one of
        our children does nothing; a node that belongs to some other parent is
        moved here.
        """
        if any(child is node for child in self.children):
            return

        if node.parent is not None:
            node.parent.children = [c for c in node.parent.children if c is not node]

        self.children.append(node)
        node.parent = self

    @property
    def is_leaf(self) -> bool:
        return len(self.children) == 0

    def leaves(self) -> list[str]:
        """The names of the leaves, left to right, skipping epsilon. For a tree
        that came out of a parse, joining these gives back the input."""
        # Trees from right-recursive grammars are as deep as the input is
        # long, so none of the walks here recurse.
        result = []
        stack = [self]
        while len(stack) > 0:
            node = stack.pop()
            if node.is_leaf:
                if node.name != EPSILON:
                    result.append(node.name)
            else:
                stack.extend(reversed(node.children))
        return result

    def format_lines(self) -> list[str]:
        lines = []
        stack = [(self, 0)]
        while len(stack) > 0:
            node, indent = stack.pop()
            lines.append((" " * indent) + node.name)
            stack.extend((child, indent + 2) for child in reversed(node.children))
        return lines

    def format(self) -> str:
        return "\n".join(self.format_lines())

    def __eq__(self, other):
        if not isinstance(other, Tree):
            return NotImplemented

        pairs = [(self, other)]
        while len(pairs) > 0:
            left, right = pairs.pop()
            if left is right:
                continue
            if left.name != right.name or len(left.children) != len(right.children):
                return False
            pairs.extend(zip(left.children, right.children))
        return True

    __hash__ = None  # type: ignore

    def __repr__(self) -> str:
        parts = []
        stack: list[Tree | str] = [self]
        while len(stack) > 0:
            item = stack.pop()
            if isinstance(item, str):
                parts.append(item)
            elif item.is_leaf:
                parts.append(item.name)
            else:
                parts.append(f"{item.name}(")
                stack.append(")")
                for index in range(len(item.children) - 1, -1, -1):
                    stack.append(item.children[index])
                    if index > 0:
                        stack.append(", ")
        return "".join(parts)


action_log = logging.getLogger("ll1.action")


class Parser:
    """Drive a compiled table over some input.

    The parser itself holds nothing but the table; all the state of a parse
    lives in `parse`, so one parser can be used from many threads at once.
    """

    table: ParseTable

    def __init__(self, table: ParseTable):
        self.table = table

    def parse(self, text: typing.Iterable[str]) -> Tree:
        """Parse a string of single-character symbols into a tree.

        Raises UnexpectedToken when the next symbol isn't the terminal we
        expected, MissingTransition when the table has nothing for the
        nonterminal we're expanding and the next symbol, and
        UnexpectedEndOfInput when we finished parsing and there is input left
        over.
        """
        table = self.table
        symbols = list(text)
        input = symbols + [SENTINEL]
        input_index = 0

        # The symbol stack and the stack of tree nodes waiting to be expanded
        # move together: parents[i] is the node for stack[i + 1].
        stack = [SENTINEL, table.start]
        root = Tree(table.start)
        parents = [root]

        al = action_log
        while stack[-1] != SENTINEL:
            symbol = stack.pop()
            current = input[input_index]

            if table.is_terminal(symbol):
                if symbol != current:
                    raise UnexpectedToken(current, symbol, input_index)

                if al.isEnabledFor(logging.INFO):
                    al.info(
                        "{stack: <30} {input: <5} match".format(
                            stack="".join(stack + [symbol])[-30:],
                            input=current,
                        )
                    )
                input_index += 1
                parents.pop()

            else:
                production = table.get(symbol, current)
                if production is None:
                    raise MissingTransition(symbol, current, input_index)

                if al.isEnabledFor(logging.INFO):
                    al.info(
                        "{stack: <30} {input: <5} {symbol} -> {production}".format(
                            stack="".join(stack + [symbol])[-30:],
                            input=current,
                            symbol=symbol,
                            production=production_str(production),
                        )
                    )

                stack.extend(reversed(production))
                parent = parents.pop()
                if len(production) == 0:
                    Tree(EPSILON, parent)
                else:
                    children = [Tree(s, parent) for s in production]
                    parents.extend(reversed(children))

        if input_index != len(symbols):
            raise UnexpectedEndOfInput("".join(symbols[input_index:]), input_index)

        return root
