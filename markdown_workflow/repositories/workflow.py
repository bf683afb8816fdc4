import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Union

from ..domain.models import Workflow
from ..exceptions import WorkflowNotFoundError
from ..parsing.parser import parse_workflow

logger = logging.getLogger(__name__)


# The Interface
class WorkflowRepository(ABC):
    """
    Defines how the application obtains Workflow definitions.
    Callers (the service layer, the CLI) never care whether the markdown
    came from disk or from memory.
    """

    @abstractmethod
    def get_workflow(self, source: str) -> Workflow:
        """
        Loads and parses a workflow.
        Raises WorkflowNotFoundError if the source does not exist, and a
        ParseError subclass if the document is invalid.
        """
        pass


class FileWorkflowRepository(WorkflowRepository):
    """
    Reads workflow documents from UTF-8 markdown files.
    """

    def __init__(self, base_dir: Union[str, Path, None] = None):
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def get_workflow(self, source: str) -> Workflow:
        path = Path(source)
        if self.base_dir is not None and not path.is_absolute():
            path = self.base_dir / path

        try:
            markdown = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise WorkflowNotFoundError(f"Workflow file '{path}' not found.") from None
        except (OSError, UnicodeDecodeError) as e:
            raise WorkflowNotFoundError(f"Could not read workflow file '{path}': {e}") from e

        logger.debug(f"Parsing workflow from {path}")
        return parse_workflow(markdown)


class InMemoryWorkflowRepository(WorkflowRepository):
    """
    Serves workflows from markdown documents held in memory.
    """

    def __init__(self, documents: Dict[str, str]):
        # Index for O(1) lookup
        self._index: Dict[str, str] = dict(documents)

    def get_workflow(self, source: str) -> Workflow:
        if source not in self._index:
            raise WorkflowNotFoundError(f"Workflow '{source}' not found.")
        return parse_workflow(self._index[source])
