"""Core application logic.

Modules:
- navigation: class-lock guard for class/subject/chapter pages
- progress: completion and accuracy for the selected class
- content_forms: admin form validation and inserts
- class_selector: selected-class upsert
"""

__all__ = [
    "navigation",
    "progress",
    "content_forms",
    "class_selector",
]
