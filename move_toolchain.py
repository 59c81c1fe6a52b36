"""Blocking wrappers around the `sui move` compiler."""

import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, List

import ujson

from kaizen_errors import ToolchainError

logger = logging.getLogger(__name__)


class MoveToolchain:
    def __init__(self, binary: str = "sui"):
        self.binary = binary

    def _run(self, args: List[str], cwd: Path) -> str:
        command = [self.binary] + args
        logger.debug(f"Running {' '.join(command)} in {cwd}")
        try:
            proc = subprocess.run(command, cwd=cwd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise ToolchainError(command, None, f"{self.binary} not found on PATH: {e}") from e

        if proc.returncode != 0:
            raise ToolchainError(command, proc.returncode, (proc.stderr or "") + (proc.stdout or ""))
        return proc.stdout

    def build(self, project_dir: Path) -> None:
        logger.info("Building Move package...")
        output = self._run(["move", "build"], project_dir)
        for line in output.splitlines():
            logger.debug(line)

    def dump_bytecode(self, project_dir: Path) -> Dict[str, Any]:
        """compile again and return {"modules": [...], "dependencies": [...]}"""
        output = self._run(["move", "build", "--dump-bytecode-as-base64"], project_dir)
        try:
            bundle = ujson.loads(output)
        except ValueError as e:
            raise ToolchainError([self.binary, "move", "build", "--dump-bytecode-as-base64"], 0,
                                 f"unexpected output, not JSON: {e}") from e

        if not isinstance(bundle, dict) or "modules" not in bundle or "dependencies" not in bundle:
            raise ToolchainError([self.binary, "move", "build", "--dump-bytecode-as-base64"], 0,
                                 "bytecode dump is missing modules or dependencies")
        return bundle
