import argparse
import sys

from PyQt5.QtWidgets import QApplication

from jellymark.config import load_settings
from jellymark.ui import MainWindow
from jellymark.utils import set_level


def main():
    """
    Main function to run the overlay viewer.
    Takes an optional PDF path and annotation file from the command line.
    """
    parser = argparse.ArgumentParser(description="Show a PDF with its annotation overlays.")
    parser.add_argument("file_path", nargs="?", help="PDF file to open")
    parser.add_argument("--annotations", help="JSON file with the annotation list")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    args = parser.parse_args()

    set_level(args.log_level)
    app = QApplication(sys.argv[:1])

    window = MainWindow(args.file_path, args.annotations, load_settings())
    window.showMaximized()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
