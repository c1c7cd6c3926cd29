import logging

import pytest

from relmodel import DEFAULT_KEYS, Aggregate, Member


@pytest.fixture
def keys():
    return DEFAULT_KEYS


@pytest.fixture
def user_aggregate(keys):
    """The User entity: implicit id key, a required email, a soft-delete stamp."""
    return Aggregate(
        name="User",
        type={
            "id": Member(type="int"),
            "email": Member(type="string"),
            "deletedAt": Member(
                type="datetime", annotations={keys.timestamp_deleted: "true"}
            ),
        },
        required=["email"],
    )


@pytest.fixture
def post_aggregate(keys):
    """The Post entity: belongs to a User through authorId."""
    return Aggregate(
        name="Post",
        type={
            "id": Member(type="integer"),
            "title": Member(type="string", required=True),
            "authorId": Member(type="integer", annotations={keys.belongs_to: "User"}),
        },
    )


@pytest.fixture
def relmodel_caplog(caplog):
    """
    Capture relmodel log records.

    The package logger does not propagate to the root logger, so the capture
    handler is attached to it directly.
    """
    logger = logging.getLogger("relmodel")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="relmodel")
    yield caplog
    logger.removeHandler(caplog.handler)
