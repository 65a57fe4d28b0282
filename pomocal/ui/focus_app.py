import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QBrush, QColor, QFont
from PyQt6.QtWidgets import (
    QCalendarWidget, QFileDialog, QFrame, QHBoxLayout, QLabel, QLineEdit, QListWidget, QListWidgetItem,
    QMainWindow, QMessageBox, QProgressBar, QPushButton, QSpinBox, QSplitter, QTabWidget, QTreeWidget,
    QTreeWidgetItem, QVBoxLayout, QWidget
)

from pomocal.core.config import (
    CALENDAR_REFRESH_MS, DEFAULT_WINDOW_SIZE, FONT_HEADER, FONT_HEADER_SIZE, FONT_LABEL, FONT_LABEL_SIZE,
    FONT_TIMER, FONT_TIMER_SIZE, MAIN_STYLE, NAV_BG_COLOR, PADDING, SOON_COLOR, SUBTASK_INDENT, TEXT_COLOR,
    URGENT_COLOR
)
from pomocal.core.dday import dday_urgency, format_dday
from pomocal.core.session_sync import credit_work_session
from pomocal.core.summary import DaySummary
from pomocal.core.timer import POMODORO, STOPWATCH
from pomocal.core.utils import (
    category_color, emoji_for, format_hours_minutes, format_minutes, format_short_time, format_total_time,
    parse_event_datetime, start_of_day, to_date
)
from pomocal.ui.dday_dialog import DDayDialog
from pomocal.ui.library_dialog import CategoryManagerDialog, LibraryDialog
from pomocal.ui.review_dialog import SessionReviewDialog
from pomocal.ui.task_dialog import TaskDialog
from pomocal.workers.api_worker import APIWorker

logger = logging.getLogger(__name__)

ID_ROLE = Qt.ItemDataRole.UserRole


class FocusApp(QMainWindow):
    """Main application window: tasks of the day, focus timer, calendar and summary."""
    def __init__(self, todo_manager, timer_manager, calendar_manager, dday_manager, book_api=None):
        super().__init__()
        self.todo_manager = todo_manager
        self.timer_manager = timer_manager
        self.calendar_manager = calendar_manager
        self.dday_manager = dday_manager
        self.book_api = book_api
        self.expanded = set()
        self.loading = False
        self._populating = False
        self._reviewing = False

        self.setWindowTitle("PomoCal")
        self.resize(*DEFAULT_WINDOW_SIZE)
        self.setStyleSheet(MAIN_STYLE)

        self.worker = APIWorker(self)
        self.worker.taskCompleted.connect(self.on_task_completed)
        self.worker.taskError.connect(self.on_task_error)
        self.worker.loadingChanged.connect(self.on_loading_changed)

        self.todo_manager.on_todo_deleted = self.remove_task_events
        self.timer_manager.on_change = self.update_timer_view
        self.timer_manager.on_work_session_completed = self.on_work_session_completed

        self.init_ui()

        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(1000)
        self.tick_timer.timeout.connect(self.on_tick)
        self.tick_timer.start()

        self.refresh_timer = QTimer(self)
        self.refresh_timer.setInterval(CALENDAR_REFRESH_MS)
        self.refresh_timer.timeout.connect(self.refresh_calendar)
        self.refresh_timer.start()

        self.refresh_all()
        self.refresh_calendar()

    # ---- layout ----

    def init_ui(self):
        """Initialize the main UI components."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self.init_navbar(main_layout)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self.init_left_panel())
        splitter.addWidget(self.init_task_panel())
        splitter.addWidget(self.init_right_panel())
        splitter.setSizes([280, 560, 440])
        main_layout.addWidget(splitter, 1)

    def init_navbar(self, parent_layout):
        """Initialize the navigation bar."""
        navbar = QFrame()
        navbar.setStyleSheet(f"background-color: {NAV_BG_COLOR};")
        nav_layout = QHBoxLayout(navbar)
        nav_layout.setContentsMargins(PADDING, PADDING, PADDING, PADDING)

        title_label = QLabel("PomoCal")
        title_label.setFont(QFont(FONT_HEADER, FONT_HEADER_SIZE, QFont.Weight.Bold))
        nav_layout.addWidget(title_label)

        self.sync_label = QLabel(self.todo_manager.sync_path or self.todo_manager.store.root)
        self.sync_label.setStyleSheet("color: #888888;")
        nav_layout.addWidget(self.sync_label, 1)

        for text, slot in (("Sync Folder...", self.choose_sync_folder), ("Force Sync", self.force_sync),
                           ("Library", self.show_library), ("Categories", self.show_categories)):
            btn = QPushButton(text)
            btn.clicked.connect(slot)
            nav_layout.addWidget(btn)

        self.access_btn = QPushButton("Grant Calendar Access")
        self.access_btn.clicked.connect(self.request_calendar_access)
        self.access_btn.setVisible(not self.calendar_manager.has_access)
        nav_layout.addWidget(self.access_btn)

        parent_layout.addWidget(navbar)

    def init_left_panel(self):
        panel = QWidget()
        layout = QVBoxLayout(panel)

        self.calendar_widget = QCalendarWidget()
        self.calendar_widget.setGridVisible(True)
        self.calendar_widget.setVerticalHeaderFormat(QCalendarWidget.VerticalHeaderFormat.NoVerticalHeader)
        self.calendar_widget.selectionChanged.connect(self.on_date_selected)
        layout.addWidget(self.calendar_widget)

        dday_header = QLabel("D-Day")
        dday_header.setFont(QFont(FONT_LABEL, FONT_LABEL_SIZE, QFont.Weight.Bold))
        layout.addWidget(dday_header)
        self.dday_list = QListWidget()
        self.dday_list.itemDoubleClicked.connect(lambda _: self.edit_dday())
        layout.addWidget(self.dday_list, 1)

        buttons = QHBoxLayout()
        for text, slot in (("+", self.add_dday), ("Edit", self.edit_dday), ("Delete", self.delete_dday)):
            btn = QPushButton(text)
            btn.clicked.connect(slot)
            buttons.addWidget(btn)
        layout.addLayout(buttons)
        return panel

    def init_task_panel(self):
        panel = QWidget()
        layout = QVBoxLayout(panel)

        header = QHBoxLayout()
        title = QLabel("Tasks")
        title.setFont(QFont(FONT_HEADER, FONT_HEADER_SIZE, QFont.Weight.Bold))
        header.addWidget(title, 1)
        add_btn = QPushButton("+ Add Task")
        add_btn.clicked.connect(self.show_add_task_dialog)
        header.addWidget(add_btn)
        layout.addLayout(header)

        self.task_tree = QTreeWidget()
        self.task_tree.setColumnCount(3)
        self.task_tree.setHeaderLabels(["Task", "Category", "Time"])
        self.task_tree.setColumnWidth(0, 300)
        self.task_tree.setIndentation(SUBTASK_INDENT)
        self.task_tree.itemChanged.connect(self.on_task_item_changed)
        self.task_tree.itemExpanded.connect(lambda item: self.expanded.add(item.data(0, ID_ROLE)))
        self.task_tree.itemCollapsed.connect(lambda item: self.expanded.discard(item.data(0, ID_ROLE)))
        self.task_tree.itemDoubleClicked.connect(lambda *_: self.show_edit_task_dialog())
        layout.addWidget(self.task_tree, 1)

        self.empty_label = QLabel("No tasks for this day")
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setStyleSheet("color: #888888;")
        layout.addWidget(self.empty_label)

        buttons = QHBoxLayout()
        for text, slot in (("Focus", self.focus_selected_task), ("Add Subtask", self.add_subtask),
                           ("Edit", self.show_edit_task_dialog), ("Delete", self.delete_selected_task)):
            btn = QPushButton(text)
            btn.clicked.connect(slot)
            buttons.addWidget(btn)
        layout.addLayout(buttons)
        return panel

    def init_right_panel(self):
        panel = QWidget()
        layout = QVBoxLayout(panel)
        layout.addWidget(self.init_timer_panel())

        tabs = QTabWidget()
        tabs.addTab(self.init_events_tab(), "Calendar")
        tabs.addTab(self.init_summary_tab(), "Summary")
        layout.addWidget(tabs, 1)
        return panel

    def init_timer_panel(self):
        frame = QFrame()
        layout = QVBoxLayout(frame)

        mode_row = QHBoxLayout()
        self.pomodoro_btn = QPushButton("Pomodoro")
        self.pomodoro_btn.clicked.connect(lambda: self.timer_manager.set_mode(POMODORO))
        mode_row.addWidget(self.pomodoro_btn)
        self.stopwatch_btn = QPushButton("Stopwatch")
        self.stopwatch_btn.clicked.connect(lambda: self.timer_manager.set_mode(STOPWATCH))
        mode_row.addWidget(self.stopwatch_btn)
        mode_row.addWidget(QLabel("Minutes:"))
        self.minutes_spin = QSpinBox()
        self.minutes_spin.setRange(1, 180)
        self.minutes_spin.setValue(self.timer_manager.work_duration // 60)
        self.minutes_spin.valueChanged.connect(self.timer_manager.set_work_duration)
        mode_row.addWidget(self.minutes_spin)
        layout.addLayout(mode_row)

        self.task_label = QLabel("")
        self.task_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.task_label)

        self.phase_label = QLabel("")
        self.phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.phase_label)

        self.time_label = QLabel("")
        self.time_label.setFont(QFont(FONT_TIMER, FONT_TIMER_SIZE, QFont.Weight.Bold))
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.time_label)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 1000)
        self.progress_bar.setTextVisible(False)
        layout.addWidget(self.progress_bar)

        self.note_edit = QLineEdit()
        self.note_edit.setPlaceholderText("Session note")
        self.note_edit.textChanged.connect(self.on_note_changed)
        layout.addWidget(self.note_edit)

        controls = QHBoxLayout()
        self.start_btn = QPushButton("Start")
        self.start_btn.clicked.connect(self.timer_manager.toggle)
        controls.addWidget(self.start_btn)
        reset_btn = QPushButton("Reset")
        reset_btn.clicked.connect(self.timer_manager.reset_timer)
        controls.addWidget(reset_btn)
        self.skip_btn = QPushButton("Skip Break")
        self.skip_btn.clicked.connect(self.timer_manager.skip_break)
        controls.addWidget(self.skip_btn)
        self.finish_btn = QPushButton("Finish")
        self.finish_btn.clicked.connect(self.finish_stopwatch)
        controls.addWidget(self.finish_btn)
        layout.addLayout(controls)
        return frame

    def init_events_tab(self):
        tab = QWidget()
        layout = QVBoxLayout(tab)
        self.events_list = QListWidget()
        layout.addWidget(self.events_list, 1)
        delete_btn = QPushButton("Delete Event")
        delete_btn.clicked.connect(self.delete_selected_event)
        layout.addWidget(delete_btn)
        return tab

    def init_summary_tab(self):
        tab = QWidget()
        layout = QVBoxLayout(tab)
        self.total_label = QLabel("")
        self.total_label.setFont(QFont(FONT_HEADER, FONT_HEADER_SIZE, QFont.Weight.Bold))
        layout.addWidget(QLabel("Total Study Time"))
        layout.addWidget(self.total_label)
        layout.addWidget(QLabel("Category Breakdown"))
        self.category_list = QListWidget()
        layout.addWidget(self.category_list, 1)
        layout.addWidget(QLabel("Task Breakdown"))
        self.breakdown_list = QListWidget()
        layout.addWidget(self.breakdown_list, 1)
        layout.addWidget(QLabel("Weekly Focus"))
        self.weekly_list = QListWidget()
        layout.addWidget(self.weekly_list, 1)
        return tab

    # ---- refresh ----

    def refresh_all(self):
        self.refresh_tasks()
        self.refresh_summary()
        self.refresh_ddays()
        self.update_timer_view()

    def refresh_tasks(self):
        """Rebuild the task tree from the manager."""
        self._populating = True
        try:
            self.task_tree.clear()
            for todo in self.todo_manager.todos:
                self.task_tree.addTopLevelItem(self._make_task_item(todo))
            for todo, _level in self.todo_manager.flattened(self.expanded):
                item = self._find_tree_item(todo.item_id)
                if item is not None and todo.item_id in self.expanded:
                    item.setExpanded(True)
        finally:
            self._populating = False
        self.empty_label.setVisible(not self.todo_manager.todos)

    def _make_task_item(self, todo):
        label = f"{emoji_for(todo.book.title)} {todo.title}" if todo.book else todo.title
        if todo.goal_range:
            label += f"  [{todo.goal_range}]"
        item = QTreeWidgetItem([label, todo.category or "", format_minutes(todo.time_spent)])
        item.setData(0, ID_ROLE, todo.item_id)
        item.setFlags(item.flags() | Qt.ItemFlag.ItemIsUserCheckable)
        item.setCheckState(0, Qt.CheckState.Checked if todo.is_completed else Qt.CheckState.Unchecked)
        if todo.category:
            item.setForeground(1, QBrush(QColor(category_color(todo.category))))
        selected = self.timer_manager.selected_task
        if selected is not None and selected.item_id == todo.item_id:
            font = item.font(0)
            font.setBold(True)
            item.setFont(0, font)
        for sub in todo.subtasks:
            item.addChild(self._make_task_item(sub))
        return item

    def _find_tree_item(self, item_id):
        stack = [self.task_tree.topLevelItem(i) for i in range(self.task_tree.topLevelItemCount())]
        while stack:
            item = stack.pop()
            if item.data(0, ID_ROLE) == item_id:
                return item
            stack.extend(item.child(i) for i in range(item.childCount()))
        return None

    def refresh_summary(self):
        summary = DaySummary.from_todos(self.todo_manager.todos)
        self.total_label.setText(format_total_time(summary.total))

        self.category_list.clear()
        if not summary.categories:
            self.category_list.addItem("No data to display")
        for category, seconds in summary.categories:
            item = QListWidgetItem(f"● {category}  {format_short_time(seconds)}")
            item.setForeground(QBrush(QColor(category_color(category))))
            self.category_list.addItem(item)

        self.breakdown_list.clear()
        for todo, share in summary.tasks:
            bar = "█" * max(1, round(share * 20))
            self.breakdown_list.addItem(f"{todo.title}  {format_short_time(todo.time_spent)}\n{bar}")

        self.weekly_list.clear()
        for day in self.todo_manager.weekly_focus_history():
            bar = "▇" * int(day.hours * 2)
            self.weekly_list.addItem(f"{day.date.strftime('%a')}  {format_hours_minutes(day.seconds):>8}  {bar}")

    def refresh_ddays(self):
        self.dday_list.clear()
        for dday in self.dday_manager.ddays:
            days = self.dday_manager.days_remaining(dday.date)
            item = QListWidgetItem(f"{format_dday(days):>7}  {dday.title}  ({to_date(dday.date).isoformat()})")
            item.setData(ID_ROLE, dday.dday_id)
            urgency = dday_urgency(days)
            if urgency == 'urgent':
                item.setForeground(QBrush(QColor(URGENT_COLOR)))
            elif urgency == 'soon':
                item.setForeground(QBrush(QColor(SOON_COLOR)))
            else:
                item.setForeground(QBrush(QColor(TEXT_COLOR)))
            self.dday_list.addItem(item)

    def refresh_events(self, events):
        self.events_list.clear()
        if not self.calendar_manager.has_access:
            self.events_list.addItem("Calendar access not granted")
            return
        for event in events:
            start = parse_event_datetime(event, 'start').astimezone()
            end = parse_event_datetime(event, 'end').astimezone()
            item = QListWidgetItem(f"{start:%H:%M}-{end:%H:%M}  {event.get('summary', '')}")
            item.setData(ID_ROLE, event)
            self.events_list.addItem(item)

    def update_timer_view(self):
        tm = self.timer_manager
        self.time_label.setText(tm.formatted_time())
        self.progress_bar.setValue(int(tm.progress * 1000))
        self.start_btn.setText("Pause" if tm.is_running else "Start")
        self.pomodoro_btn.setEnabled(tm.mode != POMODORO)
        self.stopwatch_btn.setEnabled(tm.mode != STOPWATCH)
        in_break = tm.mode == POMODORO and not tm.is_work_mode
        self.skip_btn.setVisible(in_break)
        self.finish_btn.setVisible(tm.mode == STOPWATCH)
        self.minutes_spin.setEnabled(tm.mode == POMODORO and not tm.is_running)
        if tm.mode == STOPWATCH:
            self.phase_label.setText("Stopwatch")
        else:
            self.phase_label.setText("Break" if in_break else "Focus")
        self.task_label.setText(tm.selected_task.title if tm.selected_task else "No task selected")

    # ---- timer ----

    def on_tick(self):
        self.timer_manager.tick()
        if self.timer_manager.review_pending:
            self.show_review()

    def on_note_changed(self, text):
        self.timer_manager.current_note = text

    def finish_stopwatch(self):
        self.timer_manager.finish_stopwatch()
        if self.timer_manager.review_pending:
            self.show_review()

    def show_review(self):
        """Ask for rating and note, then finalize the session."""
        if self._reviewing:
            return
        self._reviewing = True
        try:
            tm = self.timer_manager
            task_title = tm.selected_task.title if tm.selected_task else None
            dialog = SessionReviewDialog(task_title, tm.current_note, parent=self)
            dialog.exec()
            tm.finalize_session(dialog.rating, dialog.note)
        finally:
            self._reviewing = False
        self.note_edit.clear()

    def on_work_session_completed(self, duration, task_title, book_title, task_id, note, rating):
        """Save the session to the calendar in the background and credit its task."""
        self.worker.add_task(
            "save_session",
            self.calendar_manager.save_pomodoro_event,
            duration=duration,
            title=task_title,
            task_id=task_id,
            note=note,
        )
        credit_work_session(self.todo_manager, task_id, duration, note=note, rating=rating)
        self.show_alert(f"Recorded {format_minutes(duration)} on {task_title}"
                        + (f" ({book_title})" if book_title else ""))
        self.refresh_tasks()
        self.refresh_summary()

    def focus_selected_task(self):
        todo = self.selected_todo()
        if todo is None:
            return
        if not self.timer_manager.select_task(todo):
            answer = QMessageBox.question(
                self, "Switch Task?", "Current timer progress will be lost.",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.Cancel
            )
            if answer != QMessageBox.StandardButton.Yes:
                return
            self.timer_manager.select_task(todo, force=True)
        self.refresh_tasks()

    # ---- tasks ----

    def selected_todo(self):
        item = self.task_tree.currentItem()
        if item is None:
            return None
        return self.todo_manager.find(item.data(0, ID_ROLE))

    def on_task_item_changed(self, item, column):
        if self._populating or column != 0:
            return
        todo = self.todo_manager.find(item.data(0, ID_ROLE))
        if todo is None:
            return
        checked = item.checkState(0) == Qt.CheckState.Checked
        if checked != todo.is_completed:
            self.todo_manager.toggle_completion(todo.item_id)

    def show_add_task_dialog(self):
        dialog = TaskDialog(self.todo_manager, parent=self, on_confirm=self.add_task, book_api=self.book_api)
        dialog.exec()

    def add_task(self, task):
        self.todo_manager.add_todo(task)
        self.refresh_all()

    def show_edit_task_dialog(self):
        todo = self.selected_todo()
        if todo is None:
            return
        dialog = TaskDialog(self.todo_manager, parent=self, on_confirm=self.update_task, task=todo,
                            book_api=self.book_api)
        dialog.exec()

    def update_task(self, task):
        self.todo_manager.update_todo(task)
        selected = self.timer_manager.selected_task
        if selected is not None and selected.item_id == task.item_id:
            self.timer_manager.selected_task = task
        self.refresh_all()

    def add_subtask(self):
        todo = self.selected_todo()
        if todo is None:
            return
        self.todo_manager.add_subtask(todo.item_id)
        self.expanded.add(todo.item_id)
        self.refresh_tasks()

    def delete_selected_task(self):
        todo = self.selected_todo()
        if todo is None:
            return
        answer = QMessageBox.question(self, "Delete Task", f"Delete '{todo.title}' and its calendar sessions?")
        if answer != QMessageBox.StandardButton.Yes:
            return
        selected = self.timer_manager.selected_task
        self.todo_manager.delete_todo(todo.item_id)
        if selected is not None and self.todo_manager.find(selected.item_id) is None:
            self.timer_manager.select_task(None, force=True)
        self.refresh_all()

    def remove_task_events(self, todo):
        """Remove a deleted task's focus sessions from the calendar."""
        self.worker.add_task(
            "delete_events",
            self.calendar_manager.delete_pomodoro_events,
            title=todo.title,
            day=todo.date,
            task_id=todo.item_id,
        )

    # ---- dates & storage ----

    def on_date_selected(self):
        qdate = self.calendar_widget.selectedDate()
        self.todo_manager.select_date(start_of_day(qdate.toPyDate()))
        self.refresh_all()
        self.refresh_calendar()

    def choose_sync_folder(self):
        path = QFileDialog.getExistingDirectory(self, "Select Sync Folder", self.todo_manager.store.root)
        if not path:
            return
        self.todo_manager.set_sync_folder(path)
        self.sync_label.setText(path)
        self.refresh_all()

    def force_sync(self):
        try:
            self.todo_manager.force_sync()
        except OSError as e:
            QMessageBox.warning(self, "Sync failed", str(e))
            return
        self.show_alert("Synced")

    def show_library(self):
        LibraryDialog(self.todo_manager, book_api=self.book_api, parent=self).exec()

    def show_categories(self):
        CategoryManagerDialog(self.todo_manager, parent=self).exec()
        self.refresh_all()

    # ---- D-Days ----

    def _selected_dday_id(self):
        item = self.dday_list.currentItem()
        return item.data(ID_ROLE) if item else None

    def add_dday(self):
        dialog = DDayDialog(parent=self)
        if dialog.exec():
            self.dday_manager.add_dday(dialog.title, dialog.date)
            self.refresh_ddays()

    def edit_dday(self):
        dday_id = self._selected_dday_id()
        dday = next((d for d in self.dday_manager.ddays if d.dday_id == dday_id), None)
        if dday is None:
            return
        dialog = DDayDialog(parent=self, dday=dday)
        if dialog.exec():
            self.dday_manager.update_dday(dday.dday_id, dialog.title, dialog.date)
            self.refresh_ddays()

    def delete_dday(self):
        dday_id = self._selected_dday_id()
        if dday_id is not None:
            self.dday_manager.delete_dday(dday_id)
            self.refresh_ddays()

    # ---- calendar ----

    def request_calendar_access(self):
        self.worker.add_task("request_access", self.calendar_manager.request_access)

    def refresh_calendar(self):
        """Reload the selected day's events, then reconcile task times with them."""
        if not self.calendar_manager.has_access:
            self.refresh_events([])
            return
        day = self.todo_manager.selected_date
        self.worker.add_task("background_fetch", self.calendar_manager.fetch_events, day=day)
        self.worker.add_task("sync_time", self._time_map_for, day=day, legacy_titles=self.todo_manager.title_map())

    def _time_map_for(self, day, legacy_titles):
        return day, self.calendar_manager.calculate_time_spent(day, legacy_titles=legacy_titles)

    def delete_selected_event(self):
        item = self.events_list.currentItem()
        event = item.data(ID_ROLE) if item else None
        if not isinstance(event, dict):
            return
        self.worker.add_task("delete_event", self.calendar_manager.delete_event, event=event)

    # ---- worker callbacks ----

    def on_task_completed(self, result, task_type):
        """Handle completed tasks from worker thread."""
        if task_type == "background_fetch":
            self.refresh_events(result)

        elif task_type == "sync_time":
            day, time_map = result
            if time_map is not None and to_date(day) == to_date(self.todo_manager.selected_date):
                if self.todo_manager.batch_update_time(time_map):
                    self.refresh_tasks()
                    self.refresh_summary()

        elif task_type == "request_access":
            self.access_btn.setVisible(not result)
            if result:
                self.refresh_calendar()
            else:
                self.show_alert("Calendar access denied")

        elif task_type in ("save_session", "delete_events", "delete_event"):
            self.refresh_calendar()

    def on_task_error(self, error, task_type):
        """Handle errors from worker thread."""
        if task_type == "save_session":
            self.show_alert(f"Failed to save session to calendar: {error}")
        elif task_type in ("delete_events", "delete_event"):
            self.show_alert(f"Failed to delete calendar event: {error}")
        else:
            self.show_alert(f"Error in {task_type}: {error}")

    def on_loading_changed(self, is_loading):
        self.loading = is_loading

    def show_alert(self, message, duration=4000):
        """Show a message in the status bar."""
        logger.info(message)
        self.statusBar().showMessage(message, duration)

    def closeEvent(self, event):
        self.tick_timer.stop()
        self.refresh_timer.stop()
        self.worker.stop()
        super().closeEvent(event)
