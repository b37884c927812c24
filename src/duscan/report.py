import typer

from .models import DuResult, TaggedDuResult


def format_result(tagged: TaggedDuResult) -> list[str]:
    """
    Render one tagged result as three lines, e.g.

        Parallel Calculated in: 7.5724931s
        76,133 folders, 332,707 files, 42,299,411,348 bytes
        200 image files, 4,224,434 bytes
    """
    r: DuResult = tagged.result
    images: int = r.image_counts.images

    if images == 0:
        image_line: str = "No image files found in the directory."
    else:
        image_line = f"{images:,} image files, {r.image_counts.bytes:,} bytes"

    return [
        f"{tagged.mode.label} Calculated in: {r.seconds}s",
        f"{r.file_counts.folders:,} folders, {r.file_counts.files:,} files, {r.file_counts.bytes:,} bytes",
        image_line,
    ]


def print_results(path: str, results: list[TaggedDuResult]) -> None:
    typer.echo(f"Directory '{path}':\n")

    for tagged in results:
        for line in format_result(tagged):
            typer.echo(line)
        typer.echo()
