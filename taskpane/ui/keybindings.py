"""Keybindings for TaskPane.

Number keys switch lists. Printable keys go to the new-task input first
when it has focus, so quitting uses a control chord.
"""

from textual.binding import Binding

LIST_BINDINGS = [
    Binding(str(number), f"switch_list({number})", f"List {number}", show=number <= 3)
    for number in range(1, 10)
]

APP_CONTROL_BINDINGS = [
    Binding("ctrl+q", "quit", "Quit", priority=True, show=True),
    Binding("escape", "clear_details", "Clear Details", show=False),
]


def get_all_bindings() -> list[Binding]:
    """Get all application keybindings.

    Returns:
        Combined list of all keybindings
    """
    return LIST_BINDINGS + APP_CONTROL_BINDINGS
