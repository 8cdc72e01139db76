# Main.py
""""" Entry point for the LaTeX answer engine.

   Responsibilities:
   - Verify required package files exist in development mode
   - Configure logging from the "debug" setting
   - Evaluate expressions given on the command line (one JSON result per line)
   - Otherwise start the Qt answer preview

"""""
import json
import logging
import sys
from pathlib import Path

from LatexMath import MathEngine, UI, config_manager


PROJECT_ROOT = Path(__file__).resolve().parent


def check_files_exist():

    """
      Fail fast in development if required files are missing / moved / renamed.
    """

    package_dir = PROJECT_ROOT / "LatexMath"

    REQUIRED = [
        package_dir / "UI.py",
        package_dir / "MathEngine.py",
        package_dir / "Normalizer.py",
        package_dir / "ScientificEngine.py",
        package_dir / "config_manager.py",
        package_dir / "config.json",
    ]

    missing_files = [file_path.name for file_path in REQUIRED if not file_path.exists()]

    if missing_files:
        print("Error: The following files are missing or in the wrong location:")
        for file_name in missing_files:
            print(f"- {file_name}")
        sys.exit(1)


def configure_logging():
    level = logging.DEBUG if config_manager.load_setting_value("debug") == True else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")


def evaluate_arguments(expressions):
    """Print one JSON result per expression; return 0 only if all succeeded."""
    exit_code = 0
    for problem in expressions:
        result = MathEngine.parse_latex_to_number(problem)
        print(json.dumps(result.to_dict(), ensure_ascii=False))
        if not result.success:
            exit_code = 1
    return exit_code


def main(argv=None):

    """
    Keep this thin: no business logic here.
    """

    if argv is None:
        argv = sys.argv[1:]
    configure_logging()

    if argv:
        return evaluate_arguments(argv)

    # Delegate control to the UI layer; the UI owns the event loop.
    UI.main()
    return 0


if __name__ == "__main__":
    check_files_exist()
    sys.exit(main())
