"""src/mediatag/ui/cli/commands/write.py
What: Write user supplied tag values into a single media file.
Why: Expose the tag writer without a catalog around it.
"""

from __future__ import annotations

from mediatag.features.metadata import TagWriterPort, prepare_metadata_for_writing
from mediatag.platform.tagwriter import MutagenTagWriter
from mediatag.ui.cli.args.options import WriteArgs


class WriteCommand:
    """Command for writing tags to one file."""

    def __init__(self, args: WriteArgs, *, writer: TagWriterPort | None = None) -> None:
        self.args = args
        self.writer: TagWriterPort = writer or MutagenTagWriter()

    def execute(self) -> bool:
        """Write the requested values.

        Returns:
            bool: True when the file format was writable.
        """
        frames: dict[str, object] = {key: list(values) for key, values in self.args.values.items()}
        if self.args.text:
            frames["text"] = dict(self.args.text)
        tag_data = prepare_metadata_for_writing(frames)
        return self.writer.write(self.args.file_path, tag_data)
