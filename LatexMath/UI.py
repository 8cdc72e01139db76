# UI.py
""""PySide6 answer preview for the LaTeX answer engine.

Structure
---------
- AnswerPreview: one input line and a result panel

Responsibilities
----------------
- Re-evaluate the typed notation on every keystroke via MathEngine
- Show the normalized expression, the formatted value and an exact-looking hint
- Show the failure kind and message when the text does not evaluate
- Copy the value to the clipboard (pyperclip) and follow the darkmode setting

Evaluation runs on the UI thread; one call takes well under a millisecond.
"""""

import sys

import pyperclip
from PySide6 import QtWidgets
from PySide6.QtCore import Qt

from . import MathEngine as MathEngine
from . import config_manager as config_manager

approx_sign = "\u2248"  # "≈"


def preview_lines(text):
    """Build the label texts for one input string.

    Returns a dict with keys expression, value, hint, status and copy_text.
    """
    lines = {"expression": "", "value": "", "hint": "", "status": "", "copy_text": ""}
    if not text or not text.strip():
        return lines

    result = MathEngine.parse_latex_to_number(text)
    lines["expression"] = result.expression or ""

    if not result.success:
        lines["status"] = f"{result.kind.value} ({result.code}): {result.message}"
        return lines

    ausgabe_string = MathEngine.format_value(result.value)
    sign = "=" if float(ausgabe_string) == result.value else approx_sign
    lines["value"] = f"{sign} {ausgabe_string}"
    lines["copy_text"] = ausgabe_string

    hint = MathEngine.describe_value(result.value)
    if hint is not None:
        lines["hint"] = f"= {hint}"
    lines["status"] = "OK"
    return lines


class AnswerPreview(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.copy_text = ""

        # --- 2. Window Setup ---
        self.setWindowTitle("Answer Preview")
        self.resize(460, 220)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        # --- 3. Input ---
        self.input_field = QtWidgets.QLineEdit()
        self.input_field.setPlaceholderText(r"\frac{1}{3}")
        font = self.input_field.font()
        font.setPointSize(16)
        self.input_field.setFont(font)
        self.input_field.textChanged.connect(self.update_preview)
        main_v_layout.addWidget(self.input_field)

        # --- 4. Result Panel ---
        self.expression_label = QtWidgets.QLabel()
        self.value_label = QtWidgets.QLabel()
        self.hint_label = QtWidgets.QLabel()
        self.status_label = QtWidgets.QLabel()
        value_font = self.value_label.font()
        value_font.setPointSize(20)
        self.value_label.setFont(value_font)
        for label in (self.expression_label, self.value_label, self.hint_label, self.status_label):
            label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
            main_v_layout.addWidget(label)

        # --- 5. Buttons ---
        row_h_layout = QtWidgets.QHBoxLayout()
        main_v_layout.addLayout(row_h_layout)
        self.copy_button = QtWidgets.QPushButton("Copy value")
        self.copy_button.setEnabled(False)
        self.copy_button.clicked.connect(self.copy_value)
        self.darkmode_checkbox = QtWidgets.QCheckBox("Dark mode")
        self.darkmode_checkbox.setChecked(self.setting_value_list["darkmode"] == True)
        self.darkmode_checkbox.toggled.connect(self.toggle_darkmode)
        row_h_layout.addWidget(self.copy_button)
        row_h_layout.addStretch(1)
        row_h_layout.addWidget(self.darkmode_checkbox)
        main_v_layout.addStretch(1)

        self.update_darkmode()

    def update_preview(self, text):
        lines = preview_lines(text)
        self.expression_label.setText(lines["expression"])
        self.value_label.setText(lines["value"])
        self.hint_label.setText(lines["hint"])
        self.status_label.setText(lines["status"])
        self.copy_text = lines["copy_text"]
        self.copy_button.setEnabled(bool(self.copy_text))

        if self.copy_text and self.setting_value_list["copy_after_evaluate"] == True:
            self.copy_value()

    def copy_value(self):
        if not self.copy_text:
            return
        try:
            pyperclip.copy(self.copy_text)
        except pyperclip.PyperclipException as e:
            QtWidgets.QMessageBox.critical(self, "Clipboard Error", f"Could not copy the value:\n\n{e}")

    def toggle_darkmode(self, checked):
        self.setting_value_list["darkmode"] = checked
        saved_settings = config_manager.save_setting(self.setting_value_list)
        if saved_settings == {}:
            QtWidgets.QMessageBox.critical(self, "Error", "Settings could not be saved (error in config_manager).")
        self.update_darkmode()

    def update_darkmode(self):
        # Applies the darkmode stylesheet if the setting is True
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QWidget {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")  # Revert to default stylesheet


def main():
    # --- Main Application Entry Point ---
    app = QtWidgets.QApplication(sys.argv)
    window = AnswerPreview()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
