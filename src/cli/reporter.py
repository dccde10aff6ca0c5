"""Terminal output for the CLI."""
from typing import List

import click
from colorama import Fore, Style

from src.builder.field_builder import describe_field
from src.schema.models import Resource
from src.validator.data_validator import ValidationIssue


def print_header(title: str) -> None:
    """Print a section header."""
    click.echo(f"\n{Fore.CYAN}{'━' * 45}")
    click.echo(f"{Fore.CYAN}{title}")
    click.echo(f"{Fore.CYAN}{'━' * 45}{Style.RESET_ALL}\n")


def print_resource_summary(resources: List[Resource]) -> None:
    """Print every resource with its readable fields and their types."""
    print_header(f"Resources: {len(resources)}")

    for resource in resources:
        label = resource.key
        if resource.type_name != resource.key:
            label += f" ({resource.type_name})"
        click.echo(f"{Fore.WHITE}{label}{Style.RESET_ALL} | Fields: {len(resource.schema_fields)}")

        fields = resource.schema_fields
        for index, field in enumerate(fields):
            prefix = "  └─ " if index == len(fields) - 1 else "  ├─ "
            click.echo(f"{prefix}{field.name}: {Fore.YELLOW}{describe_field(field)}{Style.RESET_ALL}")
        click.echo()


def print_issues(issues: List[ValidationIssue]) -> None:
    """Print validation issues, one per line."""
    for issue in issues:
        click.echo(
            f"{Fore.RED}✗ {issue.location}{Style.RESET_ALL} "
            f"[{issue.keyword}] {issue.message}"
        )
