import logging
from pathlib import Path

from idtool.dsl import Toolchain, extract_package_name, get_toolchain, parse_module_from_file

logger = logging.getLogger(__name__)


def generate_file(src: Path, dst: Path, toolchain: Toolchain | None = None) -> None:
    """Compile a spec file and write the generated source to `dst`.

    Raises:
        ParseError: If `src` is malformed
        CompileError: If `src` is semantically invalid; `dst` is not touched
        OSError: If reading or writing fails
    """
    if toolchain is None:
        toolchain = get_toolchain()

    module = parse_module_from_file(src, toolchain.parser)
    output = toolchain.generator.compile(module, extract_package_name(src))

    with open(dst, "wb") as f:
        f.write(output)
    logger.info(f"Generated {dst} from {src}")
