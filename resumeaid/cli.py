import argparse
import sys

from dotenv import load_dotenv

from resumeaid.compiler import CompilationError, build_compiler
from resumeaid.latex_utils.sanitizer import LatexSanitizer
from resumeaid.latex_utils.writer import wrap_document
from resumeaid.logger import configure_logging, get_logger
from resumeaid.models.settings import Settings

log = get_logger(__name__)


def _read_source(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def run_serve(settings: Settings, host: str | None = None, port: int | None = None) -> None:
    import uvicorn
    from resumeaid.api import create_app

    host = host or settings.host
    port = port or settings.port
    log.info("[bold cyan]Starting API[/] at http://%s:%s", host, port)
    uvicorn.run(create_app(settings), host=host, port=port)


def run_sanitize(path: str) -> str:
    return LatexSanitizer.sanitize(_read_source(path))


def run_wrap(path: str) -> str:
    return wrap_document(LatexSanitizer.sanitize(_read_source(path)))


def run_compile(settings: Settings, path: str, output: str) -> int:
    compiler = build_compiler(settings)
    try:
        pdf = compiler.compile(_read_source(path))
    except CompilationError as e:
        log.error("[red]Compilation failed[/]: %s", e)
        return 1
    with open(output, "wb") as f:
        f.write(pdf)
    log.info("[bold green]PDF written[/]: %s", output)
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    configure_logging()
    parser = argparse.ArgumentParser(prog="resumeaid", description="Resume builder and analyzer service")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", required=False, help="Bind address (default: $RESUMEAID_HOST)")
    serve.add_argument("--port", type=int, required=False, help="Port (default: $RESUMEAID_PORT)")

    sanitize = sub.add_parser("sanitize", help="Sanitize a LaTeX body and print it")
    sanitize.add_argument("path", help="LaTeX file, or - for stdin")

    wrap = sub.add_parser("wrap", help="Sanitize a LaTeX body and wrap it in the resume preamble")
    wrap.add_argument("path", help="LaTeX file, or - for stdin")

    compile_ = sub.add_parser("compile", help="Compile a complete LaTeX document to PDF")
    compile_.add_argument("path", help="LaTeX file, or - for stdin")
    compile_.add_argument("-o", "--output", default="resume.pdf", help="Output PDF path")

    args = parser.parse_args(argv)
    settings = Settings()

    if args.command == "serve":
        run_serve(settings, args.host, args.port)
        return 0
    if args.command == "sanitize":
        print(run_sanitize(args.path))
        return 0
    if args.command == "wrap":
        print(run_wrap(args.path))
        return 0
    return run_compile(settings, args.path, args.output)


if __name__ == "__main__":
    sys.exit(main())
