import sys
import subprocess
import webbrowser
import time
from pathlib import Path

from langreader.config import Config, load_config


def find_python(venv_path: Path = Path(".venv")) -> str:
    """Interpreter of the local .venv when there is one, else the running one."""
    if sys.platform == "win32":
        python_executable = venv_path / "Scripts" / "python.exe"
    else:
        python_executable = venv_path / "bin" / "python"

    if not python_executable.exists():
        print(f"Virtual environment not found at {python_executable}, using {sys.executable}")
        return sys.executable
    return str(python_executable)


def build_command(config: Config, python_executable: str):
    return [python_executable, "-m", "uvicorn", "langreader.main:app",
            "--host", config.host, "--port", str(config.port)]


def main():
    config = load_config()
    cmd = build_command(config, find_python())
    print(f"Starting reader API: {' '.join(cmd)}")

    process = None
    try:
        process = subprocess.Popen(cmd)
        time.sleep(2)
        webbrowser.open(f"http://{config.host}:{config.port}/docs")
        process.wait()
    except KeyboardInterrupt:
        print("\nStopping...")
    except OSError as e:
        print(f"Error: {e}")
    finally:
        if process is not None and process.poll() is None:
            process.terminate()


if __name__ == "__main__":
    main()
