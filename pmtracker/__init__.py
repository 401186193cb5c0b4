"""pm-tracker: preventive maintenance checklist execution and reporting."""

__version__ = "0.1.0"
