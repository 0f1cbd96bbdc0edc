"""Dialog collecting the details needed to start a user session."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)


class SignInDialog(QDialog):
    """Dialog asking for a display name, an optional email and the admin flag."""

    def __init__(self, parent=None, display_name: str = "", email: str = "") -> None:
        super().__init__(parent)
        self.setWindowTitle("Sign In")
        self.setModal(True)
        self.setMinimumWidth(360)

        self._build_ui(display_name, email)

    def _build_ui(self, display_name: str, email: str) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        form = QFormLayout()
        self.name_input = QLineEdit(display_name)
        self.name_input.setPlaceholderText("How should we call you?")
        self.name_input.textChanged.connect(self._update_sign_in_enabled)
        form.addRow("Display name", self.name_input)

        self.email_input = QLineEdit(email)
        self.email_input.setPlaceholderText("Optional")
        form.addRow("Email", self.email_input)

        self.admin_checkbox = QCheckBox("Sign in as administrator")
        self.admin_checkbox.setToolTip("Administrators can create, edit and publish quizzes.")
        form.addRow(self.admin_checkbox)
        layout.addLayout(form)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.sign_in_button = QPushButton("Sign In")
        self.sign_in_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.sign_in_button.setDefault(True)
        button_row.addWidget(self.sign_in_button)

        layout.addLayout(button_row)
        self._update_sign_in_enabled()

    def _update_sign_in_enabled(self) -> None:
        self.sign_in_button.setEnabled(bool(self.get_display_name()))

    def get_display_name(self) -> str:
        return self.name_input.text().strip()

    def get_email(self) -> str | None:
        """Get the email address, or None when left blank."""
        return self.email_input.text().strip() or None

    def get_is_admin(self) -> bool:
        return self.admin_checkbox.isChecked()

    def get_user_id(self) -> str:
        """Stable identifier so results from earlier sessions stay attributed to the same user."""
        return (self.get_email() or self.get_display_name()).lower()
