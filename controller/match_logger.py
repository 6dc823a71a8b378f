"""Match logging.

Handles logging match events and level results using pluggable writers.
"""

import os
import sys

from game.writers import GameWriter, ResultWriter, TranscriptWriter


class MatchLogger:
    """Manages multiple match writers for flexible logging.

    Uses the Strategy pattern to support multiple output formats and destinations
    simultaneously (e.g., transcript to file, results to screen).

    Owns all writer lifecycle management including file creation, error handling,
    and writer recreation for new matches.
    """

    def __init__(
        self,
        session,
        transcript_dir: str | None = None,
        results_dir: str | None = None,
        log_to_screen: bool = False,
        log_results_to_screen: bool = False,
    ):
        """Initialize the match logger.

        Args:
            session: MatchSession instance (for seed and player names)
            transcript_dir: Directory path for transcript log files (None to disable)
            results_dir: Directory path for result log files (None to disable)
            log_to_screen: Whether to log the transcript to stdout
            log_results_to_screen: Whether to log level results to stdout
        """
        self.session = session
        self._transcript_dir = transcript_dir
        self._results_dir = results_dir
        self._log_to_screen = log_to_screen
        self._log_results_to_screen = log_results_to_screen
        self._match_active = False
        self._logged_matches = 0

        self._log_filenames = []

        self.writers: list[GameWriter] = []
        self._screen_writers: list[GameWriter] = []  # Persist across matches
        self._create_initial_writers()

    def _create_file_writer(self, directory, filename, writer_class, log_type):
        """Create a file writer, reporting failures to stderr.

        Args:
            directory: Directory path to create file in
            filename: Name of file to create
            writer_class: Writer class to instantiate
            log_type: Human-readable description for error messages

        Returns:
            Writer instance on success, None on failure
        """
        try:
            os.makedirs(directory, exist_ok=True)
            filepath = os.path.join(directory, filename)
            writer = writer_class(open(filepath, "w"))
            self._log_filenames.append(filepath)
            return writer
        except OSError as e:
            print(f"Error: Failed to create {log_type} log file: {e}", file=sys.stderr)
            print(f"Attempted path: {directory}", file=sys.stderr)
            print(f"{log_type.capitalize()} logging to file disabled for this session", file=sys.stderr)
            return None

    def _create_initial_writers(self):
        if self._log_to_screen:
            writer = TranscriptWriter(sys.stdout)
            self.writers.append(writer)
            self._screen_writers.append(writer)

        if self._log_results_to_screen:
            writer = ResultWriter(sys.stdout)
            self.writers.append(writer)
            self._screen_writers.append(writer)

        self._create_match_file_writers()

    def _create_match_file_writers(self):
        """Create file writers for the current match."""
        seed = self.session.get_seed()

        if self._transcript_dir:
            writer = self._create_file_writer(
                self._transcript_dir, f"matchlog_{seed}.txt", TranscriptWriter, "transcript"
            )
            if writer:
                self.writers.append(writer)

        if self._results_dir:
            writer = self._create_file_writer(
                self._results_dir, f"matchlog_{seed}_results.txt", ResultWriter, "results"
            )
            if writer:
                self.writers.append(writer)

    def get_log_filenames(self):
        """Get list of log filenames created."""
        return self._log_filenames.copy()

    def add_writer(self, writer: GameWriter) -> None:
        self.writers.append(writer)

    def remove_writer(self, writer: GameWriter) -> None:
        if writer in self.writers:
            self.writers.remove(writer)

    def _close_file_writers(self) -> None:
        kept = []
        for writer in self.writers:
            if writer in self._screen_writers:
                kept.append(writer)
            else:
                writer.close()
        self.writers = kept

    def start_log(self, seed: int | None) -> None:
        """Start logging a new match and write headers to all writers.

        On the first call the writers created at construction are used. On
        subsequent calls, file writers are recreated for the current seed while
        screen writers are kept.
        """
        if self._logged_matches > 0:
            self._close_file_writers()
            self._create_match_file_writers()
        self._logged_matches += 1

        if not self.writers:
            self._match_active = True
            return

        player1_name = self.session.player1_config.name
        player2_name = self.session.player2_config.name
        for writer in self.writers:
            writer.write_header(seed, player1_name, player2_name)

        self._match_active = True

    def end_log(
        self, scores: dict | None = None, winner: int | None = None, abort_reason: str | None = None
    ) -> None:
        """Write footers and close file writers (screen writers persist).

        Args:
            scores: Level wins per player
            winner: Match winner, None on a tie
            abort_reason: Marks a match cut short (e.g. "step limit"); writers
                record it instead of a winner
        """
        if not self._match_active:
            return

        for writer in self.writers:
            writer.write_footer(scores, winner, abort_reason)

        self._close_file_writers()
        self._match_active = False

    def log_event(self, player_num: int, stage: str, event_text: str) -> None:
        for writer in self.writers:
            writer.write_event(player_num, stage, event_text)

    def log_result(self, stage: str, player_num: int) -> None:
        for writer in self.writers:
            writer.write_result(stage, player_num)

    def log_comment(self, message: str) -> None:
        for writer in self.writers:
            writer.write_comment(message)
