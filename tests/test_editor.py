import asyncio

from odia_ocr.transliteration import EditorSession, TransliterationEngine, local_providers


def run(coro):
	return asyncio.run(coro)


def session(text: str = "") -> EditorSession:
	return EditorSession(TransliterationEngine(local_providers()), text)


class TestEditorSession:
	def test_typing_past_a_suggestion_keeps_buffer_as_typed(self) -> None:
		editor = session()
		assert run(editor.update("mu na", 5)) is not None
		run(editor.update("mu nam", 6))
		assert editor.text == "mu nam"
		run(editor.update("mu nam ", 7))
		assert editor.text == "mu nam "
		assert editor.suggestion is None

	def test_accept_replaces_only_current_word(self) -> None:
		editor = session()
		run(editor.update("mu bhala achi", 6))
		assert editor.accept() is True
		assert editor.text == "mu ଭଲ achi"
		assert editor.caret == 3 + len("ଭଲ")
		assert editor.suggestion is None

	def test_accept_specific_candidate(self) -> None:
		editor = session()
		run(editor.update("Na", 2))
		assert editor.suggestion.candidates[:2] == ["ଣ", "ନ"]
		assert editor.accept(1) is True
		assert editor.text == "ନ"
		assert editor.caret == 1

	def test_accept_out_of_range(self) -> None:
		editor = session()
		run(editor.update("na", 2))
		assert editor.accept(20) is False
		assert editor.text == "na"

	def test_dismiss_leaves_buffer(self) -> None:
		editor = session()
		run(editor.update("bhala", 5))
		editor.dismiss()
		assert editor.suggestion is None
		assert editor.accept() is False
		assert editor.text == "bhala"

	def test_stale_suggestion_is_not_applied(self) -> None:
		editor = session()
		run(editor.update("bhala", 5))
		editor.text = "bhalo"
		assert editor.accept() is False
		assert editor.text == "bhalo"

	def test_suggestions_never_apply_themselves(self) -> None:
		editor = session()
		for i in range(1, len("namaskar") + 1):
			run(editor.update("namaskar"[:i], i))
		assert editor.text == "namaskar"
		assert editor.suggestion is not None


class TestKeys:
	def test_tab_and_enter_accept_top_candidate(self) -> None:
		for key in ("Tab", "Enter"):
			editor = session()
			run(editor.update("na", 2))
			assert editor.handle_key(key) is True
			assert editor.text == "ନ"

	def test_escape_dismisses(self) -> None:
		editor = session()
		run(editor.update("na", 2))
		assert editor.handle_key("Escape") is True
		assert editor.suggestion is None
		assert editor.text == "na"

	def test_other_keys_pass_through(self) -> None:
		editor = session()
		run(editor.update("na", 2))
		assert editor.handle_key("m") is False
		assert editor.suggestion is not None

	def test_keys_ignored_without_suggestion(self) -> None:
		editor = session("ନ")
		assert editor.handle_key("Tab") is False
		assert editor.text == "ନ"


class TestToggle:
	def test_disabled_editor_computes_nothing(self) -> None:
		editor = session()
		assert editor.toggle() is False
		assert run(editor.update("na", 2)) is None
		assert editor.text == "na"
		assert editor.toggle() is True
		assert run(editor.update("na", 2)) is not None
