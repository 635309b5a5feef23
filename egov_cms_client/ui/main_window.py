from __future__ import annotations

import logging
import os
import threading
from tkinter import filedialog, messagebox

import customtkinter as ctk

from egov_cms_client.config import AppSettings, ConfigurationError
from egov_cms_client.logging_utils import configure_logging
from egov_cms_client.models import SIGNUP_FIELDS
from egov_cms_client.pages import (
	BOARDS,
	AdminPage,
	BoardDetailPage,
	BoardListPage,
	BoardWritePage,
	HomePage,
	MypagePage,
	SignupPage,
)
from egov_cms_client.pages.admin import status_name
from egov_cms_client.pages.navigation import (
	ADMIN_ROUTE,
	BOARD_ROUTE,
	HOME_ROUTE,
	LOGIN_ROUTE,
	MYPAGE_ROUTE,
	SIGNUP_ROUTE,
	UiThreadNavigator,
)
from egov_cms_client.pages.pagination import format_date
from egov_cms_client.services import CmsService, build_service
from egov_cms_client.stores.ui import UIState

logger = logging.getLogger(__name__)

ROUTE_TABS = {
	HOME_ROUTE: "Home",
	LOGIN_ROUTE: "Home",
	SIGNUP_ROUTE: "Sign up",
	BOARD_ROUTE: "Board",
	MYPAGE_ROUTE: "My Page",
	ADMIN_ROUTE: "Admin",
}

FIELD_LABELS = {
	"mberId": "ID",
	"mberNm": "Name",
	"password": "Password (4+ characters)",
	"passwordHint": "Password hint code",
	"passwordCnsr": "Password hint answer",
	"mberEmailAdres": "E-mail",
	"sexdstnCode": "Gender code",
	"moblphonNo": "Mobile phone",
	"zip": "Zip code",
	"adres": "Address",
	"detailAdres": "Address detail",
}

MYPAGE_EDITABLE_FIELDS = (
	"mberNm",
	"mberEmailAdres",
	"sexdstnCode",
	"moblphonNo",
	"zip",
	"adres",
	"detailAdres",
	"passwordHint",
	"passwordCnsr",
)


class WindowNavigator:
	"""Blocking dialogs plus route changes mapped onto the window's tabs."""

	def __init__(self, window: "MainWindow"):
		self._window = window

	def alert(self, message: str) -> None:
		messagebox.showinfo("eGov CMS", message, parent=self._window)

	def confirm(self, message: str) -> bool:
		return bool(messagebox.askyesno("eGov CMS", message, parent=self._window))

	def push(self, route: str) -> None:
		path = route.split("?", 1)[0]
		tab = ROUTE_TABS.get(path)
		if tab is None and path.startswith(BOARD_ROUTE):
			tab = "Board"
		self._window.show_tab(tab or "Home")


class MainWindow(ctk.CTk):
	def __init__(self, service: CmsService):
		super().__init__()
		self._service = service
		self._navigator = UiThreadNavigator(WindowNavigator(self), self)
		self.title("eGovFramework CMS Client")
		self.geometry("1100x800")
		self.minsize(960, 700)

		service.ui.use_scheduler(self)
		service.ui.subscribe(lambda state: self.after(0, lambda: self._render_ui_state(state)))
		service.session.subscribe(lambda state: self.after(0, self._refresh_auth_state))

		self._home_page = HomePage(service, self._navigator)
		self._signup_page = SignupPage(service, self._navigator)
		self._mypage_page = MypagePage(service, self._navigator)
		self._admin_page = AdminPage(service, self._navigator)
		self._board_page = BoardListPage(service, self._navigator, BOARDS[0].bbs_id)
		self._detail_page: BoardDetailPage | None = None

		self._status_label = ctk.CTkLabel(self, text="Not signed in")
		self._status_label.pack(anchor="w", padx=16, pady=(16, 4))

		self._loading_label = ctk.CTkLabel(self, text="")
		self._loading_label.pack(anchor="w", padx=16, pady=(0, 4))

		self._toast_label = ctk.CTkLabel(self, text="", text_color="#2b7a0b")
		self._toast_label.pack(anchor="w", padx=16, pady=(0, 8))

		self._tabview = ctk.CTkTabview(self)
		self._tabview.pack(fill="both", expand=True, padx=16, pady=(0, 16))
		for name in ("Home", "Board", "Write", "My Page", "Admin", "Sign up"):
			self._tabview.add(name)

		self._build_home_tab(self._tabview.tab("Home"))
		self._build_board_tab(self._tabview.tab("Board"))
		self._build_write_tab(self._tabview.tab("Write"))
		self._build_mypage_tab(self._tabview.tab("My Page"))
		self._build_admin_tab(self._tabview.tab("Admin"))
		self._build_signup_tab(self._tabview.tab("Sign up"))

		self._home_page.mount()
		self._refresh_auth_state()

	def show_tab(self, name: str) -> None:
		self._tabview.set(name)

	def _build_home_tab(self, tab) -> None:
		self._login_id = ctk.CTkEntry(tab, placeholder_text="ID")
		self._login_id.pack(fill="x", padx=12, pady=(12, 6))
		self._login_password = ctk.CTkEntry(tab, placeholder_text="Password", show="*")
		self._login_password.pack(fill="x", padx=12, pady=6)

		action_row = ctk.CTkFrame(tab)
		action_row.pack(fill="x", padx=12, pady=6)
		self._sign_in_btn = ctk.CTkButton(action_row, text="Sign in", command=self._sign_in)
		self._sign_in_btn.pack(side="left", padx=(8, 6), pady=8)
		self._sign_out_btn = ctk.CTkButton(action_row, text="Sign out", command=self._sign_out)
		self._sign_out_btn.pack(side="left", padx=6, pady=8)

		self._home_error_label = ctk.CTkLabel(tab, text="", text_color="#d14343")
		self._home_error_label.pack(anchor="w", padx=12, pady=(0, 6))

		for card in self._home_page.features:
			ctk.CTkLabel(tab, text=f"{card.title}: {card.description}").pack(anchor="w", padx=12, pady=2)

	def _build_board_tab(self, tab) -> None:
		self._board_choice = ctk.StringVar(value=BOARDS[0].name)
		ctk.CTkSegmentedButton(
			tab,
			values=[board.name for board in BOARDS],
			variable=self._board_choice,
			command=self._select_board,
		).pack(anchor="w", padx=12, pady=(12, 6))

		search_row = ctk.CTkFrame(tab)
		search_row.pack(fill="x", padx=12, pady=6)
		self._board_search = ctk.CTkEntry(search_row, placeholder_text="Search")
		self._board_search.pack(side="left", fill="x", expand=True, padx=(8, 6), pady=8)
		ctk.CTkButton(search_row, text="Search", command=self._search_board).pack(side="left", padx=6, pady=8)

		self._board_output = ctk.CTkTextbox(tab, height=300)
		self._board_output.pack(fill="both", expand=True, padx=12, pady=6)

		page_row = ctk.CTkFrame(tab)
		page_row.pack(fill="x", padx=12, pady=6)
		ctk.CTkButton(page_row, text="Previous", command=lambda: self._board_page_step(-1)).pack(side="left", padx=6, pady=8)
		self._board_page_label = ctk.CTkLabel(page_row, text="")
		self._board_page_label.pack(side="left", padx=6)
		ctk.CTkButton(page_row, text="Next", command=lambda: self._board_page_step(1)).pack(side="left", padx=6, pady=8)

		detail_row = ctk.CTkFrame(tab)
		detail_row.pack(fill="x", padx=12, pady=6)
		self._article_id = ctk.CTkEntry(detail_row, placeholder_text="Article id (nttId)")
		self._article_id.pack(side="left", padx=(8, 6), pady=8)
		ctk.CTkButton(detail_row, text="Open", command=self._open_article).pack(side="left", padx=6, pady=8)
		self._edit_btn = ctk.CTkButton(detail_row, text="Edit", command=self._edit_article, state="disabled")
		self._edit_btn.pack(side="left", padx=6, pady=8)
		self._delete_btn = ctk.CTkButton(detail_row, text="Delete", command=self._delete_article, state="disabled")
		self._delete_btn.pack(side="left", padx=6, pady=8)

		self._detail_output = ctk.CTkTextbox(tab, height=200)
		self._detail_output.pack(fill="both", expand=True, padx=12, pady=(6, 12))

	def _build_write_tab(self, tab) -> None:
		self._write_title = ctk.CTkEntry(tab, placeholder_text="Title")
		self._write_title.pack(fill="x", padx=12, pady=(12, 6))
		self._write_content = ctk.CTkTextbox(tab, height=300)
		self._write_content.pack(fill="both", expand=True, padx=12, pady=6)
		attach_row = ctk.CTkFrame(tab)
		attach_row.pack(fill="x", padx=12, pady=6)
		ctk.CTkButton(attach_row, text="Attach files", command=self._attach_files).pack(side="left", padx=(8, 6), pady=8)
		ctk.CTkButton(attach_row, text="Clear", command=self._clear_attachments).pack(side="left", padx=6, pady=8)
		self._attachments_label = ctk.CTkLabel(attach_row, text="No attachments")
		self._attachments_label.pack(side="left", padx=6)
		self._write_error_label = ctk.CTkLabel(tab, text="", text_color="#d14343")
		self._write_error_label.pack(anchor="w", padx=12, pady=(0, 6))
		ctk.CTkButton(tab, text="Submit", command=self._submit_article).pack(anchor="w", padx=12, pady=8)
		self._write_page: BoardWritePage | None = None
		self._write_attachments: list[str] = []

	def _build_mypage_tab(self, tab) -> None:
		ctk.CTkButton(tab, text="Load my information", command=self._load_mypage).pack(anchor="w", padx=12, pady=(12, 6))
		self._mypage_entries: dict[str, ctk.CTkEntry] = {}
		for name in MYPAGE_EDITABLE_FIELDS:
			entry = ctk.CTkEntry(tab, placeholder_text=FIELD_LABELS[name])
			entry.pack(fill="x", padx=12, pady=3)
			self._mypage_entries[name] = entry
		self._mypage_message = ctk.CTkLabel(tab, text="")
		self._mypage_message.pack(anchor="w", padx=12, pady=(6, 6))
		action_row = ctk.CTkFrame(tab)
		action_row.pack(fill="x", padx=12, pady=6)
		ctk.CTkButton(action_row, text="Save", command=self._save_mypage).pack(side="left", padx=(8, 6), pady=8)
		ctk.CTkButton(action_row, text="Delete account", command=self._delete_account).pack(side="left", padx=6, pady=8)

	def _build_admin_tab(self, tab) -> None:
		ctk.CTkButton(tab, text="Load members", command=self._load_admin).pack(anchor="w", padx=12, pady=(12, 6))
		self._admin_output = ctk.CTkTextbox(tab, height=400)
		self._admin_output.pack(fill="both", expand=True, padx=12, pady=6)
		page_row = ctk.CTkFrame(tab)
		page_row.pack(fill="x", padx=12, pady=6)
		ctk.CTkButton(page_row, text="Previous", command=lambda: self._admin_page_step(-1)).pack(side="left", padx=6, pady=8)
		self._admin_page_label = ctk.CTkLabel(page_row, text="")
		self._admin_page_label.pack(side="left", padx=6)
		ctk.CTkButton(page_row, text="Next", command=lambda: self._admin_page_step(1)).pack(side="left", padx=6, pady=8)

	def _build_signup_tab(self, tab) -> None:
		self._signup_entries: dict[str, ctk.CTkEntry] = {}
		for name in SIGNUP_FIELDS:
			entry = ctk.CTkEntry(tab, placeholder_text=FIELD_LABELS[name], show="*" if name == "password" else "")
			entry.pack(fill="x", padx=12, pady=3)
			self._signup_entries[name] = entry
		self._signup_confirm = ctk.CTkEntry(tab, placeholder_text="Confirm password", show="*")
		self._signup_confirm.pack(fill="x", padx=12, pady=3)
		self._signup_codes_label = ctk.CTkLabel(tab, text="")
		self._signup_codes_label.pack(anchor="w", padx=12, pady=3)
		self._signup_message = ctk.CTkLabel(tab, text="")
		self._signup_message.pack(anchor="w", padx=12, pady=6)
		action_row = ctk.CTkFrame(tab)
		action_row.pack(fill="x", padx=12, pady=6)
		ctk.CTkButton(action_row, text="Load codes", command=self._load_signup_codes).pack(side="left", padx=(8, 6), pady=8)
		ctk.CTkButton(action_row, text="Check ID", command=self._check_id).pack(side="left", padx=6, pady=8)
		ctk.CTkButton(action_row, text="Sign up", command=self._submit_signup).pack(side="left", padx=6, pady=8)

	def _run_in_background(self, call, on_done) -> None:
		self._service.ui.set_loading(True, "Working...")

		def worker():
			try:
				result = call()
			except Exception:
				logger.exception("Background task failed")
				result = None

			def finish():
				self._service.ui.set_loading(False)
				on_done(result)

			self.after(0, finish)

		threading.Thread(target=worker, daemon=True).start()

	def _render_ui_state(self, state: UIState) -> None:
		self._loading_label.configure(text=(state.loading_text or "") if state.is_loading else "")
		if state.toasts:
			latest = state.toasts[-1]
			color = {"success": "#2b7a0b", "error": "#d14343", "warning": "#b7791f"}.get(latest.type, "#2563eb")
			self._toast_label.configure(text=latest.message, text_color=color)
		else:
			self._toast_label.configure(text="")

	def _refresh_auth_state(self) -> None:
		user = self._service.session.user
		if self._service.session.is_logged_in and user is not None:
			self._status_label.configure(text=f"Signed in as {user.name or user.id} ({user.id})")
			self._sign_in_btn.configure(state="disabled")
			self._sign_out_btn.configure(state="normal")
		else:
			self._status_label.configure(text="Not signed in")
			self._sign_in_btn.configure(state="normal")
			self._sign_out_btn.configure(state="disabled")

	def _sign_in(self) -> None:
		user_id = self._login_id.get()
		password = self._login_password.get()
		self._home_error_label.configure(text="")

		def done(logged_in):
			self._home_error_label.configure(text="" if logged_in else self._home_page.error)
			if logged_in:
				self._login_password.delete(0, "end")

		self._run_in_background(lambda: self._home_page.login(user_id, password), done)

	def _sign_out(self) -> None:
		self._run_in_background(self._home_page.logout, lambda _: None)

	def _select_board(self, name: str) -> None:
		board = next(board for board in BOARDS if board.name == name)
		self._board_page = BoardListPage(self._service, self._navigator, board.bbs_id)
		self._run_in_background(self._board_page.load, lambda _: self._render_board())

	def _search_board(self) -> None:
		word = self._board_search.get()
		self._run_in_background(lambda: self._board_page.search(word), lambda _: self._render_board())

	def _board_page_step(self, step: int) -> None:
		page = self._board_page.paginator.current_page + step
		self._run_in_background(lambda: self._board_page.go_to(page), lambda _: self._render_board())

	def _render_board(self) -> None:
		page = self._board_page
		if page.error:
			text = page.error
			if page.show_login_link:
				text += "\nSign in on the Home tab to continue."
		elif not page.rows:
			text = "No articles."
		else:
			lines = [f"{page.board_name}", ""]
			for row in page.rows:
				indent = "  " * row.reply_depth + ("└ " if row.reply_depth else "")
				lines.append(
					f"[{row.ntt_id}] {row.number:>4}  {indent}{row.title}  |  {row.author}  |  {row.registered}  |  {row.views}"
				)
			text = "\n".join(lines)
		self._render_output(self._board_output, text)
		self._board_page_label.configure(
			text=f"Page {page.paginator.current_page} / {page.paginator.total_pages}"
		)

	def _open_article(self) -> None:
		try:
			ntt_id = int(self._article_id.get().strip())
		except ValueError:
			self._render_output(self._detail_output, "Enter a numeric article id.")
			return
		detail = BoardDetailPage(self._service, self._navigator, self._board_page.bbs_id, ntt_id)
		self._detail_page = detail
		self._run_in_background(detail.load, lambda _: self._render_detail())

	def _render_detail(self) -> None:
		detail = self._detail_page
		if detail is None:
			return
		if detail.error or detail.article is None:
			text = detail.error
			if detail.show_login_link:
				text += "\nSign in on the Home tab to continue."
		else:
			article = detail.article
			text = (
				f"{article.ntt_sj}\n"
				f"{article.author_name} | {detail.registered_at} | views {article.inqire_co}\n\n"
				f"{article.ntt_cn}"
			)
		self._render_output(self._detail_output, text)
		state = "normal" if detail.is_author else "disabled"
		self._edit_btn.configure(state=state)
		self._delete_btn.configure(state=state)

	def _edit_article(self) -> None:
		if self._detail_page is None:
			return
		self._open_write_page(self._detail_page.ntt_id)

	def _delete_article(self) -> None:
		detail = self._detail_page
		if detail is None:
			return

		def done(deleted):
			if deleted:
				self._detail_page = None
				self._render_output(self._detail_output, "")
				self._edit_btn.configure(state="disabled")
				self._delete_btn.configure(state="disabled")
				self._render_board()

		def delete_and_reload():
			deleted = detail.delete()
			if deleted:
				self._board_page.load()
			return deleted

		self._run_in_background(delete_and_reload, done)

	def _open_write_page(self, edit_ntt_id: int | None = None) -> None:
		page = BoardWritePage(self._service, self._navigator, self._board_page.bbs_id, edit_ntt_id)

		def done(mounted):
			if not mounted:
				return
			self._write_page = page
			self._write_title.delete(0, "end")
			self._write_title.insert(0, page.title)
			self._render_output(self._write_content, page.content)
			self._clear_attachments()
			self.show_tab("Write")

		self._run_in_background(page.mount, done)

	def _attach_files(self) -> None:
		paths = filedialog.askopenfilenames(parent=self, title="Attach files")
		for path in paths:
			if path not in self._write_attachments:
				self._write_attachments.append(path)
		self._render_attachments()

	def _clear_attachments(self) -> None:
		self._write_attachments = []
		self._render_attachments()

	def _render_attachments(self) -> None:
		names = ", ".join(os.path.basename(path) for path in self._write_attachments)
		self._attachments_label.configure(text=names or "No attachments")

	def _submit_article(self) -> None:
		page = self._write_page
		is_new = page is None
		if page is None:
			page = BoardWritePage(self._service, self._navigator, self._board_page.bbs_id)
		page.title = self._write_title.get()
		page.content = self._write_content.get("1.0", "end").strip()
		page.clear_attachments()
		page.attach(self._write_attachments)

		def submit_and_reload():
			if is_new and not page.mount():
				return False
			submitted = page.submit()
			if submitted:
				self._board_page.load()
			return submitted

		def done(submitted):
			if submitted:
				self._write_page = None
				self._write_error_label.configure(text="")
				self._clear_attachments()
				self._render_board()
			else:
				self._write_error_label.configure(text=page.error)

		self._run_in_background(submit_and_reload, done)

	def _load_mypage(self) -> None:
		if not self._mypage_page.require_login():
			return

		def done(_):
			page = self._mypage_page
			for name, entry in self._mypage_entries.items():
				entry.delete(0, "end")
				entry.insert(0, page.form.get(name, ""))
			self._mypage_message.configure(text=page.error, text_color="#d14343")

		self._run_in_background(self._mypage_page.load, done)

	def _save_mypage(self) -> None:
		page = self._mypage_page
		for name, entry in self._mypage_entries.items():
			page.set_field(name, entry.get())

		def done(_):
			if page.error:
				self._mypage_message.configure(text=page.error, text_color="#d14343")
			else:
				self._mypage_message.configure(text=page.success, text_color="#2b7a0b")

		self._run_in_background(page.save, done)

	def _delete_account(self) -> None:
		def done(deleted):
			if deleted:
				for entry in self._mypage_entries.values():
					entry.delete(0, "end")
				self._mypage_message.configure(text="")

		self._run_in_background(self._mypage_page.delete_account, done)

	def _load_admin(self) -> None:
		if not self._admin_page.require_login():
			return
		user = self._service.session.user
		self._admin_page.is_admin = bool(user and user.is_admin)
		self._run_in_background(self._admin_page.load, lambda _: self._render_admin())

	def _admin_page_step(self, step: int) -> None:
		page = self._admin_page.paginator.current_page + step
		self._run_in_background(lambda: self._admin_page.go_to(page), lambda _: self._render_admin())

	def _render_admin(self) -> None:
		page = self._admin_page
		if page.error:
			text = page.error
		elif not page.members:
			text = "No members."
		else:
			lines = [f"Total members: {page.total_records}", ""]
			for member in page.members:
				lines.append(
					f"{member.mber_id}  |  {member.mber_nm}  |  {member.mber_email_adres}  |  "
					f"{status_name(member.mber_sttus)}  |  {format_date(member.sbscrb_de)}"
				)
			text = "\n".join(lines)
		self._render_output(self._admin_output, text)
		self._admin_page_label.configure(
			text=f"Page {page.paginator.current_page} / {page.paginator.total_pages}"
		)

	def _load_signup_codes(self) -> None:
		def done(_):
			page = self._signup_page
			hints = ", ".join(f"{item.code}={item.code_nm}" for item in page.password_hints)
			genders = ", ".join(f"{item.code}={item.code_nm}" for item in page.gender_codes)
			self._signup_codes_label.configure(text=f"Hints: {hints}\nGender: {genders}")

		self._run_in_background(self._signup_page.load, done)

	def _sync_signup_form(self) -> None:
		page = self._signup_page
		for name, entry in self._signup_entries.items():
			value = entry.get()
			if page.form[name] != value:
				page.set_field(name, value)
		page.password_confirm = self._signup_confirm.get()

	def _check_id(self) -> None:
		self._sync_signup_form()
		self._run_in_background(self._signup_page.check_id, lambda _: self._render_signup_message())

	def _submit_signup(self) -> None:
		self._sync_signup_form()
		self._run_in_background(self._signup_page.submit, lambda _: self._render_signup_message())

	def _render_signup_message(self) -> None:
		page = self._signup_page
		if page.error:
			self._signup_message.configure(text=page.error, text_color="#d14343")
		else:
			self._signup_message.configure(text=page.success, text_color="#2b7a0b")

	@staticmethod
	def _render_output(text_widget: ctk.CTkTextbox, text: str) -> None:
		text_widget.delete("1.0", "end")
		text_widget.insert("1.0", text)


def run_app() -> None:
	try:
		settings = AppSettings.from_env()
	except ConfigurationError as exc:
		configure_logging()
		logger.error("Configuration error: %s", exc)
		app = ctk.CTk()
		app.title("eGov CMS Client - Configuration Error")
		app.geometry("760x360")
		message = ctk.CTkTextbox(app)
		message.pack(fill="both", expand=True, padx=16, pady=16)
		message.insert(
			"1.0",
			"Configuration error. Fix the environment variables and restart:\n\n"
			f"{exc}\n\n"
			"Settings:\n"
			"- CMS_API_URL (default http://localhost:8080)\n"
			"- CMS_TIMEOUT_SECONDS, CMS_AUTH_SCHEME, CMS_STORAGE_PATH\n"
			"- CMS_LOG_LEVEL, CMS_TOAST_DURATION_MS\n",
		)
		app.mainloop()
		return

	configure_logging(settings.log_level)
	ctk.set_appearance_mode("System")
	ctk.set_default_color_theme("blue")

	service = build_service(settings)
	window = MainWindow(service)
	window.mainloop()
