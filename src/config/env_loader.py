"""Environment variable loading for the freight rates application."""

from pathlib import Path
from dotenv import load_dotenv


def load_environment_variables(project_dir: Path = None) -> None:
    """Load environment variables from a .env file.

    Looks for .env next to the project first, then one level up so a shared
    .env can sit beside several checkouts.

    Args:
        project_dir: Project root directory. If None, resolved from this file
            (src/config -> project root).
    """
    if project_dir is None:
        project_dir = Path(__file__).parent.parent.parent

    for env_file in (project_dir / ".env", project_dir.parent / ".env"):
        if env_file.exists():
            load_dotenv(env_file)
            return
