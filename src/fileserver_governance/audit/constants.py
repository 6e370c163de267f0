"""Audit categories, actions and standard messages.

Every record stored by the file server carries one category and one
action from the classes below.
"""
from __future__ import annotations

ANONYMOUS_USER: str = "ANONYMOUS"

MESSAGE_OK: str = "OK"
MESSAGE_ERROR: str = "ERROR"


class UserAccess:
    """Login and logout of authenticated and anonymous sessions."""

    NAME = "user-access"
    LOGIN = "login"
    LOGOUT = "logout"


class FileAccess:
    """Operations on files and directories."""

    NAME = "file-access"
    DOWNLOAD = "download"
    UPLOAD = "upload"
    DELETE = "delete"
    CREATE_DIR = "create-dir"
    LIST_DIR = "list-dir"
    MOVE = "move"

    ALL: tuple[str, ...] = (DOWNLOAD, UPLOAD, DELETE, CREATE_DIR, LIST_DIR, MOVE)


class AdminAccess:
    """Administrative operations on users and access filters."""

    NAME = "admin-access"
    GET_USERS = "get-users"
    CREATE_USER = "create-user"
    DELETE_USER = "delete-user"
    GET_ACCESS_FILTERS = "get-access-filters"
    CREATE_ACCESS_FILTER = "create-access-filter"
    DELETE_ACCESS_FILTER = "delete-access-filter"


CATEGORIES: tuple[str, ...] = (UserAccess.NAME, FileAccess.NAME, AdminAccess.NAME)
