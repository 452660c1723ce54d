"""Tkinter desktop app for finding isogram word combinations."""

from __future__ import annotations

import logging
import queue
import threading
import tkinter as tk
from tkinter import filedialog, messagebox, ttk
from tkinter.scrolledtext import ScrolledText

from models import SEARCH_MODES, ProgressState, SearchEvent, SearchSettings, Solution
from session import SearchSession
from solver import sort_results
from utils import (
    DEFAULT_LANGUAGE,
    count_isogram_lines,
    default_wordlist_path,
    load_config,
    load_wordlist,
    prepare_wordlist,
    save_config,
    save_wordlist,
    settings_from_config,
    setup_logging,
)

DISCLAIMER = (
    "Results are generated automatically from the wordlist you provide and are not reviewed. "
    "Random combinations may unintentionally read as offensive or inappropriate."
)


class IsogramFinderApp(tk.Tk):
    """Desktop UI for editing wordlists and running isogram searches."""

    def __init__(self) -> None:
        super().__init__()
        setup_logging()
        self.logger = logging.getLogger(__name__)

        self.title("Isogram Finder")
        self.geometry("1200x780")
        self.minsize(1000, 650)

        self.worker_queue: queue.Queue[SearchEvent] = queue.Queue()
        self.session = SearchSession(self.worker_queue.put)
        self.search_thread: threading.Thread | None = None
        self.is_searching = False
        self.results: list[Solution] = []

        self.config_data = load_config()
        self._build_vars()
        self._build_ui()
        self._load_default_wordlist()
        self.after(100, self._poll_worker_queue)

    def _build_vars(self) -> None:
        settings = settings_from_config(self.config_data)
        self.language_var = tk.StringVar(value=self.config_data.get("language", DEFAULT_LANGUAGE))
        self.min_len_var = tk.IntVar(value=settings.min_len)
        self.max_len_var = tk.IntVar(value=settings.max_len)
        self.top_n_var = tk.IntVar(value=settings.top_n)
        self.mode_var = tk.StringVar(value=settings.search_mode)
        self.start_size_var = tk.IntVar(value=settings.start_size)
        self.top_percent_var = tk.IntVar(value=settings.high_low_top_percent)
        self.bottom_percent_var = tk.IntVar(value=settings.high_low_bottom_percent)
        self.sort_var = tk.StringVar(value="score")
        self.status_var = tk.StringVar(value="Load or paste a wordlist, then start a search.")
        self.progress_var = tk.StringVar(value="")
        self.entries_var = tk.StringVar(value="0 isograms")

    def _build_ui(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(2, weight=1)

        disclaimer = ttk.Label(self, text=DISCLAIMER, wraplength=1150, padding=8, foreground="#8a5a00")
        disclaimer.grid(row=0, column=0, sticky="ew")

        top = ttk.Frame(self, padding=8)
        top.grid(row=1, column=0, sticky="ew")
        ttk.Label(top, text="Language:").grid(row=0, column=0, sticky="w", padx=(0, 8))
        ttk.Radiobutton(top, text="Deutsch", value="de", variable=self.language_var, command=self._load_default_wordlist).grid(row=0, column=1, padx=(0, 8))
        ttk.Radiobutton(top, text="English", value="en", variable=self.language_var, command=self._load_default_wordlist).grid(row=0, column=2, padx=(0, 16))
        ttk.Button(top, text="Load Wordlist...", command=self._load_wordlist_clicked).grid(row=0, column=3, padx=(0, 8))
        ttk.Button(top, text="Save Wordlist As...", command=self._save_wordlist_clicked).grid(row=0, column=4, padx=(0, 8))
        ttk.Button(top, text="Prepare Wordlist", command=self._prepare_clicked).grid(row=0, column=5, padx=(0, 8))
        ttk.Label(top, textvariable=self.entries_var).grid(row=0, column=6, sticky="w")

        middle = ttk.Panedwindow(self, orient=tk.HORIZONTAL)
        middle.grid(row=2, column=0, sticky="nsew", padx=8, pady=(0, 6))

        left = ttk.Frame(middle)
        left.columnconfigure(0, weight=1)
        left.rowconfigure(0, weight=1)

        input_frame = ttk.LabelFrame(left, text="Wordlist", padding=8)
        input_frame.grid(row=0, column=0, sticky="nsew")
        input_frame.columnconfigure(0, weight=1)
        input_frame.rowconfigure(0, weight=1)
        self.input_text = ScrolledText(input_frame, wrap=tk.WORD, font=("Segoe UI", 11), height=12)
        self.input_text.grid(row=0, column=0, sticky="nsew")
        self.input_text.bind("<<Modified>>", self._on_wordlist_modified)

        options = ttk.LabelFrame(left, text="Configuration", padding=8)
        options.grid(row=1, column=0, sticky="ew", pady=(6, 0))
        self._spinbox_row(options, 0, "Minimum length", self.min_len_var, 0, 50)
        self._spinbox_row(options, 1, "Maximum length (0 = unlimited)", self.max_len_var, 0, 50)
        self._spinbox_row(options, 2, "Top N results (0 = all)", self.top_n_var, 0, 50)
        ttk.Label(options, text="Search mode").grid(row=3, column=0, sticky="w", pady=2)
        modes = ttk.Frame(options)
        modes.grid(row=3, column=1, sticky="w")
        for col, mode in enumerate(SEARCH_MODES):
            ttk.Radiobutton(modes, text=mode.title(), value=mode, variable=self.mode_var).grid(row=0, column=col, padx=(0, 8))
        self._spinbox_row(options, 4, "Start size (split)", self.start_size_var, 1, 200)
        self._spinbox_row(options, 5, "Top words % (high-low)", self.top_percent_var, 0, 100)
        self._spinbox_row(options, 6, "Bottom words % (high-low)", self.bottom_percent_var, 0, 100)

        buttons = ttk.Frame(options)
        buttons.grid(row=7, column=0, columnspan=2, sticky="w", pady=(8, 0))
        self.search_button = ttk.Button(buttons, text="Find Isograms", command=self._start_search)
        self.search_button.grid(row=0, column=0, padx=(0, 8))
        self.cancel_button = ttk.Button(buttons, text="Cancel Search", command=self._cancel_search, state=tk.DISABLED)
        self.cancel_button.grid(row=0, column=1)

        results_frame = ttk.LabelFrame(middle, text="Results", padding=8)
        results_frame.columnconfigure(0, weight=1)
        results_frame.rowconfigure(1, weight=1)
        tabs = ttk.Frame(results_frame)
        tabs.grid(row=0, column=0, sticky="w", pady=(0, 6))
        ttk.Radiobutton(tabs, text="Top by score", value="score", variable=self.sort_var, command=self._render_results).grid(row=0, column=0, padx=(0, 8))
        ttk.Radiobutton(tabs, text="Top by length", value="length", variable=self.sort_var, command=self._render_results).grid(row=0, column=1)

        self.results_tree = ttk.Treeview(
            results_frame,
            columns=("rank", "text", "length", "score", "words"),
            show="headings",
            height=14,
        )
        self.results_tree.heading("rank", text="#")
        self.results_tree.heading("text", text="Combination")
        self.results_tree.heading("length", text="Length")
        self.results_tree.heading("score", text="Score")
        self.results_tree.heading("words", text="Words")
        self.results_tree.column("rank", width=40, anchor=tk.E)
        self.results_tree.column("text", width=260, anchor=tk.W)
        self.results_tree.column("length", width=70, anchor=tk.E)
        self.results_tree.column("score", width=80, anchor=tk.E)
        self.results_tree.column("words", width=280, anchor=tk.W)
        tree_scroll = ttk.Scrollbar(results_frame, orient=tk.VERTICAL, command=self.results_tree.yview)
        self.results_tree.configure(yscrollcommand=tree_scroll.set)
        self.results_tree.grid(row=1, column=0, sticky="nsew")
        tree_scroll.grid(row=1, column=1, sticky="ns")

        middle.add(left, weight=1)
        middle.add(results_frame, weight=2)

        status_row = ttk.Frame(self, padding=(8, 0, 8, 8))
        status_row.grid(row=3, column=0, sticky="ew")
        status_row.columnconfigure(1, weight=1)
        ttk.Label(status_row, text="Status:").grid(row=0, column=0, sticky="w", padx=(0, 8))
        ttk.Label(status_row, textvariable=self.status_var).grid(row=0, column=1, sticky="w")
        ttk.Label(status_row, textvariable=self.progress_var).grid(row=1, column=1, sticky="w")
        self.progress = ttk.Progressbar(status_row, orient=tk.HORIZONTAL, length=220, mode="indeterminate")
        self.progress.grid(row=0, column=2, sticky="e")

    def _spinbox_row(self, parent: ttk.Frame, row: int, label: str, var: tk.IntVar, low: int, high: int) -> None:
        ttk.Label(parent, text=label).grid(row=row, column=0, sticky="w", pady=2, padx=(0, 12))
        ttk.Spinbox(parent, from_=low, to=high, textvariable=var, width=6).grid(row=row, column=1, sticky="w")

    def _wordlist_text(self) -> str:
        return self.input_text.get("1.0", tk.END)

    def _set_wordlist_text(self, text: str) -> None:
        self.input_text.delete("1.0", tk.END)
        self.input_text.insert("1.0", text)
        self._update_entry_count()

    def _update_entry_count(self) -> None:
        self.entries_var.set(f"{count_isogram_lines(self._wordlist_text())} isograms")

    def _on_wordlist_modified(self, _event: object) -> None:
        if self.input_text.edit_modified():
            self._update_entry_count()
            self.input_text.edit_modified(False)

    def _load_default_wordlist(self) -> None:
        language = self.language_var.get()
        try:
            self._set_wordlist_text(load_wordlist(default_wordlist_path(language)))
            self.status_var.set(f"Loaded default {language} wordlist.")
        except Exception as exc:
            self.logger.exception("Failed loading default wordlist")
            self._set_wordlist_text("")
            self.status_var.set(f"Failed to load default wordlist: {exc}")

    def _load_wordlist_clicked(self) -> None:
        path = filedialog.askopenfilename(
            title="Select wordlist file",
            filetypes=[("Text files", "*.txt"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            self._set_wordlist_text(load_wordlist(path))
        except Exception as exc:
            self.logger.exception("Failed reading wordlist")
            messagebox.showerror("Load error", f"Failed to read file: {exc}")
            return
        self.config_data["last_wordlist_path"] = path
        save_config(self.config_data)
        self.status_var.set("Wordlist loaded successfully.")

    def _save_wordlist_clicked(self) -> None:
        path = filedialog.asksaveasfilename(
            title="Save wordlist",
            initialfile="isogram_wordlist.txt",
            defaultextension=".txt",
            filetypes=[("Text files", "*.txt"), ("All files", "*.*")],
        )
        if not path:
            return
        try:
            save_wordlist(path, self._wordlist_text())
            self.status_var.set("Wordlist saved successfully.")
        except Exception as exc:
            self.logger.exception("Failed saving wordlist")
            messagebox.showerror("Save error", f"Failed to save wordlist: {exc}")

    def _prepare_clicked(self) -> None:
        words = prepare_wordlist(self._wordlist_text(), self.language_var.get())
        self._set_wordlist_text("\n".join(words))
        self.status_var.set(f"Prepared wordlist: {len(words)} unique isograms found.")

    def _current_settings(self) -> SearchSettings:
        return SearchSettings(
            min_len=self.min_len_var.get(),
            max_len=self.max_len_var.get(),
            top_n=self.top_n_var.get(),
            search_mode=self.mode_var.get(),
            start_size=self.start_size_var.get(),
            high_low_top_percent=self.top_percent_var.get(),
            high_low_bottom_percent=self.bottom_percent_var.get(),
        )

    def _start_search(self) -> None:
        if self.is_searching:
            return
        if self.search_thread is not None and self.search_thread.is_alive():
            self.status_var.set("Previous search is still stopping, try again in a moment.")
            return
        try:
            settings = self._current_settings()
        except (tk.TclError, ValueError) as exc:
            messagebox.showerror("Invalid settings", str(exc))
            return
        word_list = self._wordlist_text()
        if count_isogram_lines(word_list) == 0:
            messagebox.showinfo("Empty wordlist", "The wordlist contains no isograms.")
            return

        self.config_data["language"] = self.language_var.get()
        self.config_data["settings"] = settings.to_dict()
        save_config(self.config_data)

        self.is_searching = True
        self.results = []
        self._render_results()
        self.progress_var.set("")
        self.status_var.set("Searching...")
        self.search_button.configure(state=tk.DISABLED)
        self.cancel_button.configure(state=tk.NORMAL)
        self.progress.start(10)

        self.search_thread = threading.Thread(
            target=self.session.start_search,
            args=(word_list, settings, self.language_var.get()),
            daemon=True,
        )
        self.search_thread.start()

    def _cancel_search(self) -> None:
        if not self.is_searching:
            return
        self.session.cancel_search()
        self._finish_search("Search cancelled by user.")

    def _finish_search(self, status: str) -> None:
        self.is_searching = False
        self.search_button.configure(state=tk.NORMAL)
        self.cancel_button.configure(state=tk.DISABLED)
        self.progress.stop()
        self.status_var.set(status)

    def _poll_worker_queue(self) -> None:
        try:
            while True:
                event = self.worker_queue.get_nowait()
                if not self.is_searching:
                    continue
                if event.kind == "progress":
                    self._handle_progress(event.payload)
                elif event.kind == "solution":
                    self.results = event.payload
                    self._render_results()
                elif event.kind == "done":
                    self.results = event.payload
                    self._render_results()
                    self._finish_search(f"Search finished: {len(self.results)} results.")
                elif event.kind == "error":
                    self._finish_search("Search failed.")
                    messagebox.showerror("Search error", event.payload["message"])
        except queue.Empty:
            pass
        finally:
            self.after(100, self._poll_worker_queue)

    def _handle_progress(self, progress: ProgressState) -> None:
        longest = progress.longest.text if progress.longest else "-"
        best = progress.best_score.text if progress.best_score else "-"
        self.progress_var.set(
            f"Solutions: {progress.solutions_found}  Words scanned: {progress.words_scanned}  "
            f"Longest: {longest}  Best score: {best}"
        )

    def _render_results(self) -> None:
        self.results_tree.delete(*self.results_tree.get_children())
        try:
            top_n = self.top_n_var.get()
        except tk.TclError:
            top_n = 0
        ordered = sort_results(self.results, by=self.sort_var.get(), top_n=max(top_n, 0))
        for rank, solution in enumerate(ordered, start=1):
            self.results_tree.insert(
                "",
                tk.END,
                values=(rank, solution.text, solution.length, f"{solution.score:.2f}", solution.display),
            )


def main() -> None:
    app = IsogramFinderApp()
    app.mainloop()


if __name__ == "__main__":
    main()
