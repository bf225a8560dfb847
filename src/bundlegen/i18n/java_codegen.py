"""
Java source rendering for I18N helper classes.

One helper class is rendered per resource bundle. The class loads the bundle
under its own qualified name and provides a constant plus a format method
for every selected key.
"""

from __future__ import annotations

import html
import re
from pathlib import Path

from ..utils.core.exceptions import GenerationError
from .bundles import Bundle

IDENTIFIER_RE = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

JAVA_KEYWORDS = frozenset(
    {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch",
        "char", "class", "const", "continue", "default", "do", "double",
        "else", "enum", "extends", "false", "final", "finally", "float",
        "for", "goto", "if", "implements", "import", "instanceof", "int",
        "interface", "long", "native", "new", "null", "package", "private",
        "protected", "public", "return", "short", "static", "strictfp",
        "super", "switch", "synchronized", "this", "throw", "throws",
        "transient", "true", "try", "void", "volatile", "while", "_",
    }
)

# Members every helper class declares itself
RESERVED_CONSTANTS = frozenset({"BUNDLE"})


def is_java_identifier(name: str) -> bool:
    """Check whether a name can be used as a Java identifier."""
    return IDENTIFIER_RE.fullmatch(name) is not None and name not in JAVA_KEYWORDS


def _check_names(bundle: Bundle) -> None:
    if not is_java_identifier(bundle.class_name):
        raise GenerationError(
            f"Bundle {bundle.relative_path}: '{bundle.class_name}' is not a valid class name",
            context=bundle.path,
            recoverable=False,
        )

    # One package segment per directory
    for segment in bundle.package_parts:
        if not is_java_identifier(segment):
            raise GenerationError(
                f"Bundle {bundle.relative_path}: directory '{segment}' is not a valid package name",
                context=bundle.path,
                recoverable=False,
            )

    for key in bundle.entries:
        if not is_java_identifier(key) or key in RESERVED_CONSTANTS:
            raise GenerationError(
                f"Bundle {bundle.relative_path}: key '{key}' cannot be used as a constant name",
                context=bundle.path,
                recoverable=False,
            )


def _javadoc_text(text: str, indent: str) -> list[str]:
    # Backslashes are escaped as well, javac reads \u sequences inside comments
    escaped = (
        html.escape(text, quote=False)
        .replace("\\", "&#92;")
        .replace("*/", "*&#47;")
        .replace("@", "&#64;")
    )
    return [f"{indent} * {line}".rstrip() for line in escaped.split("\n")]


def _render_key(key: str, text: str) -> list[str]:
    indent = "\t"
    lines = [
        "",
        f"{indent}/**",
        f"{indent} * Resource key {{@code {key}}}",
        f"{indent} * <p>",
        *_javadoc_text(text, indent),
        f"{indent} * </p>",
        f"{indent} */",
        f'{indent}public static final String {key} = "{key}";',
        "",
        f"{indent}/**",
        f"{indent} * Resource string {{@code {key}}}",
        f"{indent} * <p>",
        *_javadoc_text(text, indent),
        f"{indent} * </p>",
        f"{indent} *",
        f"{indent} * @param arguments the format arguments.",
        f"{indent} * @return the formatted string.",
        f"{indent} */",
        f"{indent}public static String format{key}(Object... arguments) {{",
        f"{indent}\treturn format({key}, arguments);",
        f"{indent}}}",
    ]
    return lines


def render_helper_class(bundle: Bundle) -> str:
    """
    Render the Java helper class for a bundle.

    Args:
        bundle: The bundle to render

    Returns:
        Java source code

    Raises:
        GenerationError: If the bundle's class, package or key names are not
            valid Java identifiers
    """
    _check_names(bundle)

    name = bundle.class_name
    lines = [
        "/*",
        f" * I18N helper class for resource bundle {bundle.relative_path}",
        " *",
        " * Generated by bundlegen. Do not edit.",
        " */",
    ]
    if bundle.package:
        lines.append(f"package {bundle.package};")
        lines.append("")

    lines += [
        "import java.text.MessageFormat;",
        "import java.util.ResourceBundle;",
        "",
        "/**",
        f" * Resource bundle <code>{bundle.qualified_name}</code>.",
        " */",
        f"public final class {name} {{",
        "",
        "\t/**",
        "\t * The resource bundle represented by this class.",
        "\t */",
        f"\tpublic static final ResourceBundle BUNDLE = ResourceBundle.getBundle({name}.class.getName());",
        "",
        f"\tprivate {name}() {{",
        "\t\t// Prevent instantiation",
        "\t}",
        "",
        "\t/**",
        "\t * Format a resource string.",
        "\t *",
        "\t * @param key the resource key.",
        "\t * @param arguments the format arguments.",
        "\t * @return the formatted string.",
        "\t */",
        "\tpublic static String format(String key, Object... arguments) {",
        "\t\tString pattern = BUNDLE.getString(key);",
        "",
        "\t\treturn (arguments.length > 0 ? MessageFormat.format(pattern, arguments) : pattern);",
        "\t}",
    ]

    for key, text in bundle.entries.items():
        lines += _render_key(key, text)

    lines += ["", "}", ""]
    return "\n".join(lines)


def helper_class_path(bundle: Bundle, gen_dir: Path) -> Path:
    """Get the output file of a bundle's helper class below gen_dir."""
    return gen_dir.joinpath(*bundle.package_parts, f"{bundle.class_name}.java")
