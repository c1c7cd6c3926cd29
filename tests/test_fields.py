import logging

import pytest
from pydantic import ValidationError

from relmodel import (
    AnnotationKeys,
    Datatype,
    FieldCompileError,
    Member,
    Relationship,
    compile_field,
)
from relmodel.fields import datatype_for


class TestNameAndType:
    """Test identifier normalization and datatype translation."""

    def test_id_suffix_normalized(self):
        field = compile_field("userId", Member(type="integer"))
        assert field.name == "UserID"
        assert field.column_name == "UserID"
        assert field.datatype is Datatype.INTEGER

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("boolean", Datatype.BOOLEAN),
            ("integer", Datatype.INTEGER),
            ("number", Datatype.NUMBER),
            ("string", Datatype.STRING),
            ("datetime", Datatype.DATETIME),
            ("uuid", Datatype.UUID),
            ("bytes", Datatype.BYTES),
            ("any", Datatype.ANY),
            (" String ", Datatype.STRING),
            ("int", Datatype.INTEGER),
            ("float", Datatype.NUMBER),
            ("double", Datatype.NUMBER),
            ("bool", Datatype.BOOLEAN),
            ("str", Datatype.STRING),
            ("TEXT", Datatype.STRING),
            ("date-time", Datatype.DATETIME),
            ("timestamp", Datatype.DATETIME),
        ],
    )
    def test_datatype_for(self, tag, expected):
        assert datatype_for(tag) is expected

    def test_unknown_type_raises_field_compile_error(self):
        with pytest.raises(FieldCompileError, match="unsupported primitive type") as excinfo:
            compile_field("score", Member(type="matrix"))
        assert excinfo.value.member_name == "score"
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_unusable_name_raises_field_compile_error(self):
        with pytest.raises(FieldCompileError, match="cannot derive an identifier"):
            compile_field("__", Member(type="string"))

    def test_nullable_follows_required(self):
        assert compile_field("a", Member(type="string")).nullable is True
        assert compile_field("a", Member(type="string", required=True)).nullable is False

    def test_description_copied(self):
        field = compile_field("email", Member(type="string", description="Login"))
        assert field.description == "Login"

    def test_empty_description_is_none(self):
        field = compile_field("email", Member(type="string", description=""))
        assert field.description is None


class TestPrimaryKey:
    """Test explicit and implicit primary-key detection."""

    @pytest.mark.parametrize("name", ["id", "Id", "ID"])
    def test_implicit_id(self, name):
        assert compile_field(name, Member(type="integer")).is_primary_key

    def test_explicit_marker(self, keys):
        member = Member(type="string", annotations={keys.primary_key: "primary_key"})
        assert compile_field("slug", member).is_primary_key

    def test_marker_token_inside_a_longer_value(self, keys):
        member = Member(
            type="string", annotations={keys.primary_key: "primary_key;not null"}
        )
        assert compile_field("slug", member).is_primary_key

    def test_annotation_without_token_is_ignored(self, keys):
        member = Member(type="string", annotations={keys.primary_key: "unique"})
        assert not compile_field("slug", member).is_primary_key

    def test_id_suffix_is_not_a_primary_key(self):
        assert not compile_field("userId", Member(type="integer")).is_primary_key

    def test_both_triggers(self, keys):
        member = Member(type="integer", annotations={keys.primary_key: "primary_key"})
        assert compile_field("id", member).is_primary_key


class TestSqlTag:
    def test_raw_type_override_copied_verbatim(self, keys):
        member = Member(type="string", annotations={keys.sql_tag: "type:varchar(64)"})
        field = compile_field("code", member)
        assert field.raw_type_override == "type:varchar(64)"
        assert field.datatype is Datatype.STRING

    def test_no_override(self):
        assert compile_field("code", Member(type="string")).raw_type_override is None


class TestTimestamps:
    """Test created, updated and deleted timestamp handling."""

    def test_created(self, keys):
        member = Member(type="string", annotations={keys.timestamp_created: ""})
        field = compile_field("createdAt", member)
        assert field.is_timestamp
        assert field.datatype is Datatype.DATETIME
        assert field.nullable is False

    def test_updated(self, keys):
        member = Member(type="datetime", annotations={keys.timestamp_updated: ""})
        field = compile_field("updatedAt", member)
        assert field.is_timestamp
        assert field.nullable is False

    def test_deleted_is_nullable_even_when_required(self, keys):
        member = Member(
            type="datetime", required=True, annotations={keys.timestamp_deleted: ""}
        )
        field = compile_field("deletedAt", member)
        assert field.is_timestamp
        assert field.nullable is True

    def test_deleted_overrides_created(self, keys):
        member = Member(
            type="datetime",
            annotations={keys.timestamp_created: "", keys.timestamp_deleted: ""},
        )
        assert compile_field("stamp", member).nullable is True

    def test_plain_datetime_is_not_a_timestamp(self):
        field = compile_field("birthday", Member(type="datetime"))
        assert not field.is_timestamp
        assert field.nullable is True


class TestAlias:
    def test_alias_sets_column_name(self, keys):
        member = Member(type="string", annotations={keys.alias: "email_address"})
        field = compile_field("email", member)
        assert field.is_aliased
        assert field.column_name == "email_address"
        assert field.name == "Email"

    def test_without_alias_column_is_name(self):
        field = compile_field("email", Member(type="string"))
        assert not field.is_aliased
        assert field.column_name == field.name


class TestRelationships:
    """Test relationship extraction and precedence."""

    @pytest.mark.parametrize(
        "attr,expected",
        [
            ("belongs_to", Relationship.belongs_to("User")),
            ("has_one", Relationship.has_one("User")),
            ("has_many", Relationship.has_many("User")),
            ("many_to_many", Relationship.many_to_many("User")),
        ],
    )
    def test_each_kind(self, keys, attr, expected):
        member = Member(type="any", annotations={getattr(keys, attr): "User"})
        assert compile_field("owner", member).relationship == expected

    def test_no_relationship(self):
        assert compile_field("owner", Member(type="any")).relationship is None

    def test_last_kind_wins_and_warns(self, keys, relmodel_caplog):
        member = Member(
            type="any",
            annotations={keys.belongs_to: "User", keys.has_many: "Comment"},
        )
        field = compile_field("owner", member)
        assert field.relationship == Relationship.has_many("Comment")
        warnings = [r for r in relmodel_caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "owner" in warnings[0].getMessage()


class TestKeysAndImmutability:
    def test_custom_vocabulary(self):
        keys = AnnotationKeys.with_prefix("gorma")
        member = Member(type="string", annotations={"gorma:alias": "col"})
        assert compile_field("name", member, keys).column_name == "col"
        # The default vocabulary ignores keys from another namespace
        assert compile_field("name", member).column_name == "Name"

    def test_member_is_not_mutated(self, keys):
        member = Member(type="string", annotations={keys.timestamp_created: ""})
        before = member.model_dump()
        compile_field("createdAt", member)
        assert member.model_dump() == before

    def test_field_is_frozen(self):
        field = compile_field("email", Member(type="string"))
        with pytest.raises(ValidationError):
            field.nullable = False

    def test_compile_is_deterministic(self, keys):
        member = Member(
            type="integer",
            description="Author",
            annotations={keys.belongs_to: "User", keys.alias: "author"},
        )
        assert compile_field("authorId", member) == compile_field("authorId", member)
