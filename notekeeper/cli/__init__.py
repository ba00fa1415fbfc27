"""
CLI Module.

Command-line client built with Typer and Rich.

Architecture:
- CLI is a thin presentation layer
- All persistence lives in NoteStore
- Composer and editor flows go through EditSession

Usage:
    notekeeper --help
    notekeeper list --search groceries
    notekeeper add --title "Groceries" --body "milk, eggs"
"""
