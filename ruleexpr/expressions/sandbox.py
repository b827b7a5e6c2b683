"""Expression engine backed by the Jinja2 sandbox.

Uses jinja2's ImmutableSandboxedEnvironment so expressions cannot reach
private attributes, call unsafe functions or mutate the facts they read.
Undefined names fail loudly through StrictUndefined.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from jinja2 import StrictUndefined, TemplateSyntaxError, Undefined, UndefinedError, nodes
from jinja2.environment import TemplateExpression
from jinja2.exceptions import SecurityError, TemplateRuntimeError
from jinja2.parser import Parser
from jinja2.sandbox import ImmutableSandboxedEnvironment

from ruleexpr.exceptions import (
    EvaluationError,
    ParseError,
    UndefinedFactError,
)
from ruleexpr.expressions.coercion import BooleanCoercer
from ruleexpr.expressions.engine import ExpressionEngine
from ruleexpr.expressions.models import CompiledExpression, ParseOptions
from ruleexpr.expressions.template import split_template
from ruleexpr.expressions.variables import (
    VARIABLE_SCOPE,
    VariableScope,
    rewrite_variable_references,
)
from ruleexpr.observability.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExpressionBlock:
    """A single compiled expression within a SandboxExpression."""

    source: str
    function: TemplateExpression


@dataclass(frozen=True)
class SandboxExpression(CompiledExpression):
    """Compiled form produced by SandboxEngine.

    parts holds literal strings and ExpressionBlocks in source order. A
    plain (non-template) expression is a single block.
    """

    parts: tuple[str | ExpressionBlock, ...] = ()
    root_names: frozenset[str] = field(default_factory=frozenset)
    variable_names: frozenset[str] = field(default_factory=frozenset)


class SandboxEngine(ExpressionEngine):
    """Compile and evaluate expressions with the Jinja2 sandbox."""

    # Safe functions whitelist - exposed as globals to every expression
    SAFE_FUNCTIONS: dict[str, Callable[..., Any]] = {
        "len": len,
        "abs": abs,
        "min": min,
        "max": max,
        "lower": lambda s: s.lower() if isinstance(s, str) else s,
        "upper": lambda s: s.upper() if isinstance(s, str) else s,
        "int": int,
        "float": float,
        "str": str,
        "bool": bool,
        "round": round,
        "any": any,
        "all": all,
        "sum": sum,
    }

    def __init__(
        self,
        coercer: BooleanCoercer | None = None,
        functions: Mapping[str, Callable[..., Any]] | None = None,
    ) -> None:
        super().__init__(coercer)
        self._env = ImmutableSandboxedEnvironment(undefined=StrictUndefined)
        self._env.globals.update(self.SAFE_FUNCTIONS)
        if functions:
            self._env.globals.update(functions)

    @property
    def function_names(self) -> frozenset[str]:
        """Names resolved as functions rather than facts."""
        return frozenset(self._env.globals)

    def compile(
        self,
        expression: str,
        options: ParseOptions | None = None,
    ) -> SandboxExpression:
        """Parse expression text into a reusable SandboxExpression.

        Raises:
            ParseError: If the text is empty or not a valid expression
        """
        if not isinstance(expression, str):
            raise ParseError(
                f"Expression must be a string, got {type(expression).__name__}",
                str(expression),
            )
        if not expression.strip():
            raise ParseError("Expression must not be empty", expression)

        options = options or ParseOptions()
        parts: list[str | ExpressionBlock] = []
        root_names: set[str] = set()
        variable_names: set[str] = set()

        if options.template:
            for part in split_template(expression, options.prefix, options.suffix):
                if not part.is_expression:
                    parts.append(part.text)
                    continue
                block, roots, variables = self._compile_block(
                    part.text, expression, offset=part.position
                )
                parts.append(block)
                root_names |= roots
                variable_names |= variables
        else:
            block, roots, variables = self._compile_block(expression, expression)
            parts.append(block)
            root_names |= roots
            variable_names |= variables

        logger.debug(
            "expression_compiled",
            expression=expression,
            template=options.template,
            block_count=sum(isinstance(p, ExpressionBlock) for p in parts),
        )

        return SandboxExpression(
            source=expression,
            names=frozenset(root_names | variable_names),
            parts=tuple(parts),
            root_names=frozenset(root_names),
            variable_names=frozenset(variable_names),
        )

    def _compile_block(
        self,
        source: str,
        full_text: str,
        offset: int = 0,
    ) -> tuple[ExpressionBlock, frozenset[str], frozenset[str]]:
        """Compile one expression block.

        Returns:
            Tuple of (block, bare names referenced, #variables referenced)
        """
        try:
            rewritten, variable_names = rewrite_variable_references(source)
        except ParseError as e:
            position = None if e.position is None else e.position + offset
            raise ParseError(e.message, full_text, position=position) from e

        try:
            parser = Parser(self._env, rewritten, state="variable")
            tree = parser.parse_expression()
            if not parser.stream.eos:
                raise TemplateSyntaxError(
                    "chunk after expression",
                    parser.stream.current.lineno,
                )
            function = self._env.compile_expression(rewritten, undefined_to_none=False)
        except TemplateSyntaxError as e:
            # Jinja2 reports lines within the block; #name rewriting keeps them
            first_line = full_text.count("\n", 0, offset) + 1
            raise ParseError(
                f"Invalid expression syntax: {e.message}",
                full_text,
                line=first_line + e.lineno - 1,
            ) from e

        return (
            ExpressionBlock(source=source, function=function),
            self._collect_root_names(tree),
            variable_names,
        )

    def _collect_root_names(self, tree: nodes.Expr) -> frozenset[str]:
        """Find the bare names an expression reads from the root mapping.

        A global function counts only where it is called; anywhere else the
        name is read as a fact, which shadows the global when supplied.
        """
        found = [tree] if isinstance(tree, nodes.Name) else []
        found.extend(tree.find_all(nodes.Name))
        calls = [tree] if isinstance(tree, nodes.Call) else []
        calls.extend(tree.find_all(nodes.Call))
        called = {id(call.node) for call in calls if isinstance(call.node, nodes.Name)}
        return frozenset(
            node.name
            for node in found
            if node.ctx == "load"
            and node.name != VARIABLE_SCOPE
            and not (node.name in self._env.globals and id(node) in called)
        )

    def evaluate(
        self,
        compiled: CompiledExpression,
        root: Mapping[str, Any],
        variables: Mapping[str, Any],
    ) -> Any:
        """Evaluate a SandboxExpression against fresh root/variable bindings.

        Raises:
            UndefinedFactError: If a referenced fact is not supplied
            EvaluationError: If the sandbox rejects an operation
        """
        if not isinstance(compiled, SandboxExpression):
            raise EvaluationError(
                f"SandboxEngine cannot evaluate {type(compiled).__name__}",
                expression=compiled.source,
            )

        context: dict[str, Any] = dict(root)
        context[VARIABLE_SCOPE] = VariableScope(variables, root, compiled.source)

        try:
            values = [
                part if isinstance(part, str) else self._run_block(part, compiled, context)
                for part in compiled.parts
            ]
            if len(compiled.parts) == 1:
                return values[0]
            return "".join(str(value) for value in values)

        except UndefinedError as e:
            raise UndefinedFactError(
                e.message or "Undefined value in expression",
                expression=compiled.source,
                name=self._first_missing_name(compiled, root),
            ) from e

        except SecurityError as e:
            raise EvaluationError(
                f"Operation not allowed in expression: {e.message}",
                expression=compiled.source,
            ) from e

        except TemplateRuntimeError as e:
            raise EvaluationError(
                f"Expression evaluation error: {e.message}",
                expression=compiled.source,
            ) from e

    def _run_block(
        self,
        block: ExpressionBlock,
        compiled: SandboxExpression,
        context: dict[str, Any],
    ) -> Any:
        value = block.function(context)
        if isinstance(value, Undefined):
            raise UndefinedFactError(
                f"Expression '{block.source}' evaluated to an undefined value",
                expression=compiled.source,
                name=self._first_missing_name(compiled, context),
            )
        return value

    @staticmethod
    def _first_missing_name(
        compiled: SandboxExpression,
        root: Mapping[str, Any],
    ) -> str | None:
        missing = sorted(name for name in compiled.root_names if name not in root)
        return missing[0] if missing else None
