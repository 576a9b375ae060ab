"""Modal editor for the non-geometric attributes of one mapped field."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QRadioButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from docmapper.model.field import FieldFormat, FieldType, WhoFills, editor_controls
from docmapper.state.session import MappingSession

_MAX_CHARACTERS_LIMIT = 100_000


class FieldEditDialog(QDialog):
    """Edits ``session.draft``; OK commits, Cancel discards, Remove deletes."""

    def __init__(self, session: MappingSession, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        if session.draft is None:
            raise RuntimeError("Open a field in the session before showing the editor")
        self._session = session
        draft = session.draft

        action = "New Field" if session.is_pending else "Edit Field"
        self.setWindowTitle(f"{action}: {draft.source_field_label}")
        self.setModal(True)

        self.admin_radio = QRadioButton(WhoFills.ADMIN.value)
        self.candidate_radio = QRadioButton(WhoFills.CANDIDATE.value)
        who_group = QButtonGroup(self)
        who_group.addButton(self.admin_radio)
        who_group.addButton(self.candidate_radio)
        who_row = QWidget()
        who_layout = QHBoxLayout(who_row)
        who_layout.setContentsMargins(0, 0, 0, 0)
        who_layout.addWidget(self.admin_radio)
        who_layout.addWidget(self.candidate_radio)

        self.required_check = QCheckBox("Required")
        self.type_combo = QComboBox()
        self.type_combo.currentIndexChanged.connect(self._on_type_changed)

        self.max_chars_spin = QSpinBox()
        self.max_chars_spin.setRange(0, _MAX_CHARACTERS_LIMIT)
        self.max_chars_spin.setSpecialValueText("No limit")

        self.format_combo = QComboBox()
        for fmt in FieldFormat:
            self.format_combo.addItem(fmt.value, fmt.value)

        self.populate_check = QCheckBox("Populate with data")
        self.flow_back_check = QCheckBox("Data flows back to record")

        self.form = QFormLayout()
        self.form.addRow("Source", QLabel(f"{draft.source_field_label} ({draft.source_field_name})"))
        self.form.addRow("Who will fill field", who_row)
        self.form.addRow("", self.required_check)
        self.form.addRow("Field type", self.type_combo)
        self.form.addRow("Max characters", self.max_chars_spin)
        self.form.addRow("Format", self.format_combo)
        self.form.addRow("", self.populate_check)
        self.form.addRow("", self.flow_back_check)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel
        )
        remove_button = buttons.addButton("Remove", QDialogButtonBox.ButtonRole.DestructiveRole)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        remove_button.clicked.connect(self._on_remove)

        layout = QVBoxLayout(self)
        layout.addLayout(self.form)
        layout.addWidget(QLabel("Size is controlled by the resize handle on the field."))
        layout.addWidget(buttons)

        self._load_draft()

    def accept(self) -> None:  # type: ignore[override]
        max_chars = self.max_chars_spin.value()
        self._session.update_draft(
            who_fills=WhoFills.ADMIN if self.admin_radio.isChecked() else WhoFills.CANDIDATE,
            required=self.required_check.isChecked(),
            field_type=FieldType(self.type_combo.currentData()),
            max_characters=max_chars or None,
            format=FieldFormat(self.format_combo.currentData()),
            populate_with_data=self.populate_check.isChecked(),
            data_flow_back=self.flow_back_check.isChecked(),
        )
        self._session.commit_draft()
        super().accept()

    def reject(self) -> None:  # type: ignore[override]
        self._session.cancel_draft()
        super().reject()

    def _on_remove(self) -> None:
        draft = self._session.draft
        if draft is not None:
            self._session.remove_field(draft.id)
        super().reject()

    def _load_draft(self) -> None:
        draft = self._session.draft
        self.admin_radio.setChecked(draft.who_fills is WhoFills.ADMIN)
        self.candidate_radio.setChecked(draft.who_fills is WhoFills.CANDIDATE)
        self.required_check.setChecked(draft.required)
        self.max_chars_spin.setValue(draft.max_characters or 0)
        self.format_combo.setCurrentIndex(self.format_combo.findData(draft.format.value))
        self.populate_check.setChecked(draft.populate_with_data)
        self.flow_back_check.setChecked(draft.data_flow_back)

        controls = editor_controls(draft)
        self.type_combo.blockSignals(True)
        self.type_combo.clear()
        for field_type in controls.type_choices:
            self.type_combo.addItem(field_type.value, field_type.value)
        self.type_combo.setCurrentIndex(self.type_combo.findData(draft.field_type.value))
        self.type_combo.blockSignals(False)
        self._refresh_controls()

    def _on_type_changed(self, index: int) -> None:
        value = self.type_combo.itemData(index)
        if value is None or self._session.draft is None:
            return
        self._session.update_draft(field_type=FieldType(value))
        self._refresh_controls()

    def _refresh_controls(self) -> None:
        controls = editor_controls(self._session.draft)
        self.type_combo.setEnabled(not controls.type_locked)
        self.form.setRowVisible(self.max_chars_spin, controls.show_max_characters)
        self.form.setRowVisible(self.format_combo, controls.show_format)
        self.form.setRowVisible(self.populate_check, controls.show_populate)
        self.form.setRowVisible(self.flow_back_check, controls.show_data_flow_back)
