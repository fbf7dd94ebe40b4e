"""
Blocking message boxes used by the pages.

Kept in one module so pages stay declarative and tests can patch a single
seam instead of QMessageBox itself.
"""

from PyQt6.QtWidgets import QMessageBox, QWidget

from pocketstore.gui.viewmodels import ConfirmationToken, Outcome

__all__ = ["show_notice", "ask_confirmation"]


def show_notice(parent: QWidget, notice) -> None:
    """Show *notice* (a Notice or None); cancellations are not shown."""
    if notice is None or notice.outcome is Outcome.CANCELLED:
        return
    if notice.ok or notice.outcome is Outcome.NO_DATA:
        QMessageBox.information(parent, notice.title, notice.message)
    else:
        QMessageBox.warning(parent, notice.title, notice.message)


def ask_confirmation(parent: QWidget, token: ConfirmationToken) -> bool:
    """Ask the user to confirm the destructive action behind *token*."""
    answer = QMessageBox.question(
        parent,
        "Confirm deletion",
        token.prompt,
        QMessageBox.StandardButton.Cancel | QMessageBox.StandardButton.Yes,
        QMessageBox.StandardButton.Cancel,
    )
    return answer == QMessageBox.StandardButton.Yes
