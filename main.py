"""FFclip entry point: `python main.py [input-file]`."""

import sys
from PySide6.QtWidgets import QApplication
from PySide6.QtGui import QFont
from qt_material import apply_stylesheet

from ui import MainWindow


def main():
    app = QApplication(sys.argv)
    app.setApplicationName("FFclip")
    app.setFont(QFont("Segoe UI", 10))
    apply_stylesheet(app, theme="dark_lightgreen.xml")

    # Qt strips its own options from argv; anything left is ours
    args = app.arguments()[1:]

    window = MainWindow(input_path=args[0] if args else "")
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
