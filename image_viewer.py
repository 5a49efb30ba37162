import argparse
import logging
import sys

from PyQt5.QtWidgets import QApplication

from IV_Libs.ViewerLib.main_window import ImageViewerWindow
from IV_Libs.constants import APPLICATION_NAME, ORGANIZATION_NAME


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=f"{APPLICATION_NAME} - view and edit a single image")
    parser.add_argument("file", nargs="?", default="", help="Image file to open on startup")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main() -> None:
    args = parse_args(sys.argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv)
    app.setApplicationName(APPLICATION_NAME)
    app.setOrganizationName(ORGANIZATION_NAME)

    window = ImageViewerWindow()
    if args.file and not window.load_file(args.file):
        sys.exit(-1)
    window.show()
    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
