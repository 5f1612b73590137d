"""Command line entry point: classify files, or analyze and split a sales pack."""

import argparse
import asyncio
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from docpipe.config.settings import Settings
from docpipe.documents.file_loader import FileLoader
from docpipe.documents.models import AnalysisResult, BatchProgress, ClassificationResult
from docpipe.documents.naming import split_filename
from docpipe.logging.logger import Log
from docpipe.processor.processor import DocumentPipeline, build_pipeline


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docpipe", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    classify = commands.add_parser("classify", help="classify one or more files")
    classify.add_argument("paths", nargs="+", type=Path)

    analyze = commands.add_parser("analyze", help="group the pages of a multi-page PDF")
    analyze.add_argument("pdf", type=Path)
    analyze.add_argument("--split-dir", type=Path, help="write one PDF per document here")
    analyze.add_argument("--customer", default="", help="customer name for output filenames")
    analyze.add_argument(
        "--keep-blank", action="store_true", help="keep blank pages in split output"
    )
    return parser


def classification_to_dict(filename: str, result: ClassificationResult) -> dict[str, Any]:
    data = asdict(result)
    data["method"] = result.method.value
    data["needs_review"] = result.needs_review
    return {"filename": filename, **data}


def analysis_to_dict(result: AnalysisResult) -> dict[str, Any]:
    return {
        "total_pages": result.total_pages,
        "customer_name": result.customer_name,
        "strategy": result.strategy,
        "failures": result.failures,
        "ungrouped_pages": result.ungrouped_pages,
        "pages": [
            {
                "page_number": page.page_number,
                "document_type": page.document_type,
                "confidence": page.confidence,
            }
            for page in result.page_classifications
        ],
        "suggested_splits": [
            {
                "id": split.id,
                "document_type": split.document_type,
                "document_type_name": split.document_type_name,
                "pages": split.pages,
                "confidence": split.confidence,
            }
            for split in result.suggested_splits
        ],
    }


def _log_progress(progress: BatchProgress) -> None:
    Log.info(f"[{progress.completed}/{progress.total}] {progress.filename}")


async def run_classify(pipeline: DocumentPipeline, paths: list[Path]) -> list[dict[str, Any]]:
    files = FileLoader().load_many(paths)
    results = await pipeline.classify_batch(files, on_progress=_log_progress)
    return [classification_to_dict(f.name, r) for f, r in zip(files, results)]


async def run_analyze(
    pipeline: DocumentPipeline,
    pdf: Path,
    split_dir: Path | None,
    customer: str,
    keep_blank: bool,
) -> dict[str, Any]:
    source = FileLoader().load(pdf)
    analysis = await pipeline.analyze(source)
    output = analysis_to_dict(analysis)
    if split_dir is None:
        return output

    split_dir.mkdir(parents=True, exist_ok=True)
    documents = await pipeline.split(source, analysis, remove_blank_pages=not keep_blank)
    written = []
    for document in documents:
        name = split_filename(customer or analysis.customer_name, document.document_type)
        target = split_dir / name
        if target.exists() or name in written:
            name = f"{Path(name).stem}_{document.id}.pdf"
            target = split_dir / name
        target.write_bytes(document.output or b"")
        written.append(name)
        Log.info(f"Wrote {target} (pages {document.pages})")
    output["split_files"] = written
    return output


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> build pipeline -> print JSON to stdout."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    pipeline = build_pipeline(settings)

    try:
        if args.command == "classify":
            output: Any = asyncio.run(run_classify(pipeline, args.paths))
        else:
            output = asyncio.run(
                run_analyze(pipeline, args.pdf, args.split_dir, args.customer, args.keep_blank)
            )
    except (FileNotFoundError, ValueError) as exc:
        Log.error(str(exc))
        return 1

    json.dump(output, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
