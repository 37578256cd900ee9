import dataclasses


def make_syntax_tree_node(base_class, name, *attrs):
    # Nodes compare and hash by identity so that the resolver can key its
    # side-table on them; frozen keeps the tree immutable once parsed.
    subclass = dataclasses.make_dataclass(
        name, attrs, bases=(base_class,), frozen=True, eq=False)
    subclass.__qualname__ = f"{base_class.__name__}.{name}"
    subclass.__module__ = __name__
    setattr(base_class, name, subclass)


class Expr:
    pass


class Stmt:
    pass


# Expr subclasses
make_syntax_tree_node(Expr, "Assign", "name", "value")
make_syntax_tree_node(Expr, "Binary", "left", "operator", "right")
make_syntax_tree_node(Expr, "Call", "callee", "paren", "arguments")
make_syntax_tree_node(Expr, "Comma", "expressions")
make_syntax_tree_node(Expr, "Conditional", "predicate", "consequent", "alternative")
make_syntax_tree_node(Expr, "Function", "keyword", "params", "body")
make_syntax_tree_node(Expr, "Get", "object", "name")
make_syntax_tree_node(Expr, "Grouping", "expression")
make_syntax_tree_node(Expr, "Literal", "value")
make_syntax_tree_node(Expr, "Logical", "left", "operator", "right")
make_syntax_tree_node(Expr, "Set", "object", "name", "value")
make_syntax_tree_node(Expr, "Super", "keyword", "method")
make_syntax_tree_node(Expr, "This", "keyword")
make_syntax_tree_node(Expr, "Unary", "operator", "right")
make_syntax_tree_node(Expr, "Variable", "name")

# Stmt subclasses
make_syntax_tree_node(Stmt, "Block", "statements")
make_syntax_tree_node(Stmt, "Class", "name", "superclass", "methods")
make_syntax_tree_node(Stmt, "Expression", "expression")
make_syntax_tree_node(Stmt, "Function", "name", "params", "body")
make_syntax_tree_node(Stmt, "If", "condition", "then_branch", "else_branch")
make_syntax_tree_node(Stmt, "Print", "expression")
make_syntax_tree_node(Stmt, "Return", "keyword", "value")
make_syntax_tree_node(Stmt, "Var", "name", "initializer")
make_syntax_tree_node(Stmt, "While", "condition", "body")
