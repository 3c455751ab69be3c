"""Treeutil exceptions."""


class TreeUtilException(Exception):
    """Base for all the exceptions raised by treeutil."""


class InvalidArgument(TreeUtilException):
    """Raised when a forest, node or children field has the wrong shape."""
