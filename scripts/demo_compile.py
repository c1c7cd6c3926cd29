# /// script
# dependencies = [
#     "pydantic>=2.0",
#     "relmodel",
#     "rich",
# ]
# ///

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from relmodel import (
    Aggregate,
    FieldCompileError,
    InvalidCacheDuration,
    Member,
    compile_model,
)
from relmodel import DEFAULT_KEYS as KEYS

console = Console()


def show_step(title: str, code: str):
    """Utility to display a code snippet and its title."""
    console.print(f"\n[bold blue]>>> {title}[/bold blue]")
    syntax = Syntax(code, "python", theme="monokai", line_numbers=False)
    console.print(Panel(syntax, expand=False, border_style="dim"))


# 1. Describe the aggregates as an annotation source would hand them over
user = Aggregate(
    name="UserModel",
    type={
        "id": Member(type="integer"),
        "email": Member(type="string", description="Login address"),
        "firstName": Member(type="string"),
        "createdAt": Member(
            type="datetime", annotations={KEYS.timestamp_created: ""}
        ),
        "deletedAt": Member(
            type="datetime", annotations={KEYS.timestamp_deleted: ""}
        ),
        "posts": Member(type="any", annotations={KEYS.has_many: "Post"}),
    },
    required=["email"],
    annotations={KEYS.cached: "300", KEYS.table_name: "users"},
)

post = Aggregate(
    name="Post",
    type={
        "slug": Member(
            type="string",
            annotations={KEYS.primary_key: "primary_key", KEYS.alias: "post_slug"},
        ),
        "title": Member(type="string", required=True),
        "body": Member(type="string", annotations={KEYS.sql_tag: "type:text"}),
        "authorId": Member(type="integer", annotations={KEYS.belongs_to: "User"}),
        "tags": Member(type="any", annotations={KEYS.many_to_many: "Tag"}),
    },
)


def render(model):
    """Print a model's fields in canonical order."""
    table = Table(title=f"{model.name} ({model.table_name or model.name.lower()})")
    table.add_column("field")
    table.add_column("column")
    table.add_column("type")
    table.add_column("null")
    table.add_column("pk")
    table.add_column("relationship")
    for field in model.iter_fields():
        rel = field.relationship
        table.add_row(
            field.name,
            field.column_name,
            field.raw_type_override or field.datatype.value,
            "yes" if field.nullable else "no",
            "yes" if field.is_primary_key else "",
            f"{rel.kind.value} {rel.target}" if rel else "",
        )
    console.print(table)


def run_demo():
    console.print(
        Panel.fit(
            "[bold green]relmodel compiler demo[/bold green]",
            border_style="bold green",
        )
    )

    show_step("Compile an aggregate", 'user_model = compile_model("UserModel", user)')
    user_model = compile_model("UserModel", user)
    render(user_model)
    console.print(
        f"Cached for [cyan]{user_model.cache_duration}[/cyan]s, "
        f"has many: [cyan]{list(user_model.relationship_names.has_many)}[/cyan]"
    )

    show_step("Explicit primary keys and aliases", 'post_model = compile_model("Post", post)')
    post_model = compile_model("Post", post)
    render(post_model)
    console.print(
        f"Primary key columns: [cyan]{list(post_model.primary_key_columns)}[/cyan]"
    )

    console.print("\n[bold yellow]--- Errors ---[/bold yellow]")
    broken_cache = user.model_copy(update={"annotations": {KEYS.cached: "abc"}})
    try:
        compile_model("User", broken_cache)
    except InvalidCacheDuration as e:
        console.print(f"[red]{e}[/red]")

    broken_type = Aggregate(name="Odd", type={"blob": Member(type="matrix")})
    try:
        compile_model("Odd", broken_type)
    except FieldCompileError as e:
        console.print(f"[red]{e}[/red]")


if __name__ == "__main__":
    run_demo()
