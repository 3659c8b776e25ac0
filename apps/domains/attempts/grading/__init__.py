# apps/domains/attempts/grading/__init__.py
