"""Pytest configuration and fixtures for query translation tests."""

from typing import Any, List, Tuple

import pytest

from restplan.schema import ModelSchema


def make_model(name: str, fields: dict) -> ModelSchema:
    return ModelSchema(name=name, fields=fields)


@pytest.fixture
def schemas():
    """Small cyclic schema graph.

    User.posts -> Post, Post.owner -> User (aliased "Owner"),
    Post.comments -> Comment, Comment.author -> User, Post.tags -> Tag,
    User.company -> Company. Tag and Company declare no associations.
    """
    user = make_model(
        "User",
        {
            "id": {"queryable": True},
            "name": {"queryable": True},
            "email": {"queryable": True},
            "password": {"exclude": True},
            "status": {"queryable": True},
            "age": {"queryable": True},
            "__v": {},
        },
    )
    post = make_model(
        "Post",
        {
            "id": {"queryable": True},
            "title": {"queryable": True},
            "description": {"queryable": True},
            "published": {"queryable": True},
            "views": {"queryable": True},
            "__v": {},
        },
    )
    comment = make_model("Comment", {"id": {"queryable": True}, "body": {"queryable": True}, "__v": {}})
    tag = make_model("Tag", {"id": {}, "label": {"queryable": True}, "__v": {}})
    company = make_model("Company", {"id": {}, "name": {"queryable": True}, "__v": {}})

    user.associate("posts", post).associate("company", company)
    post.associate("owner", user, alias="Owner").associate("comments", comment).associate("tags", tag)
    comment.associate("author", user)
    return {"User": user, "Post": post, "Comment": comment, "Tag": tag, "Company": company}


@pytest.fixture
def user_model(schemas):
    return schemas["User"]


@pytest.fixture
def post_model(schemas):
    return schemas["Post"]


class RecordingSink:
    """Logging sink double that records (level, message) pairs."""

    def __init__(self) -> None:
        self.records: List[Tuple[str, str]] = []

    def warning(self, msg: str, *args: Any) -> None:
        self.records.append(("warning", msg % args if args else msg))

    def error(self, msg: str, *args: Any) -> None:
        self.records.append(("error", msg % args if args else msg))

    def levels(self) -> List[str]:
        return [level for level, _ in self.records]


@pytest.fixture
def sink():
    return RecordingSink()
