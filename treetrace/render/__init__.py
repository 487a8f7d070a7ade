from .console import snapshot_tree, step_table, step_panel, print_steps

__all__ = ["snapshot_tree", "step_table", "step_panel", "print_steps"]
