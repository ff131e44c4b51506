"""Static charts for the inventory dashboard."""
