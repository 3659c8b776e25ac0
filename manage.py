#!/usr/bin/env python
"""Management entry point for the assignment grading API."""
import os
import sys


def main():
    os.environ.setdefault("DJANGO_SETTINGS_MODULE", "apps.api.config.settings.dev")

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Install the project first: pip install -e '.[test]'"
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
