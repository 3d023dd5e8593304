"""
Analyzer Driver

Orchestrates parse → type inference for one source text, or inference alone
for a tree built by another front end.
"""

import logging
from typing import Dict, List, Optional

from ..analysis.environment import Environment
from ..frontend.parser import Parser, ParseError
from ..passes.type_inference import TypeInferencePass
from ..shared.nodes import ASTNode
from ..shared.types import Type
from ..utils.config import DEFAULT_SOURCE_FILE

logger = logging.getLogger(__name__)


class AnalysisResult:
    """Analysis result"""
    def __init__(
        self,
        env: Environment,
        program: Optional[ASTNode] = None,
        return_type: Optional[Type] = None,
        success: bool = False,
        parse_error: Optional[ParseError] = None,
    ):
        self.env = env
        self.program = program
        self.return_type = return_type
        self.success = success
        self.parse_error = parse_error

    def has_errors(self) -> bool:
        """True if parsing failed or type errors were collected."""
        return not self.success or self.env.has_errors()

    def get_errors(self) -> List[str]:
        """Formatted errors, parse error first."""
        errors: List[str] = []
        if self.parse_error is not None:
            errors.append(str(self.parse_error))
        if self.env.has_errors():
            errors.append(self.env.reporter.format_all_errors(color=False))
        return errors


class AnalyzerDriver:
    """
    Analyzer driver.

    - Stateless between runs: every call builds a fresh Environment unless
      the caller passes one in
    - The parser is created once (Lark grammar load is the expensive part)
    """

    def __init__(self):
        self.parser = Parser()

    def analyze(
        self,
        source: str,
        source_file: str = DEFAULT_SOURCE_FILE,
        env: Optional[Environment] = None,
    ) -> AnalysisResult:
        """
        Parse and analyze source code.

        A syntax error yields an unsuccessful result; type errors do not, the
        result is complete with signatures and errors together.
        """
        env = env if env is not None else Environment()
        env.reporter.source_files[source_file] = source

        try:
            program = self.parser.parse(source, source_file)
        except ParseError as e:
            logger.debug(f"parse failed for {source_file}")
            return AnalysisResult(env=env, success=False, parse_error=e)

        return self._run(program, env)

    def analyze_tree(self, tree: ASTNode, env: Optional[Environment] = None,
                     source_files: Optional[Dict[str, str]] = None) -> AnalysisResult:
        """Analyze a tree built by another front end."""
        env = env if env is not None else Environment()
        if source_files:
            env.reporter.source_files.update(source_files)
        return self._run(tree, env)

    def _run(self, tree: ASTNode, env: Environment) -> AnalysisResult:
        return_type = TypeInferencePass().run(tree, env)
        return AnalysisResult(env=env, program=tree, return_type=return_type, success=True)
