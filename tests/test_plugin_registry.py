import pytest

from vim_motion.errors import ErrorCode, VimError
from vim_motion.plugin import AbstractVimPlugin, ExecutionContext, PluginRegistry, VimPlugin
from vim_motion.state import TextBuffer, VimMode, VimState


class RecordingPlugin(AbstractVimPlugin):
    def __init__(self, name: str, patterns: tuple[str, ...], **overrides: object) -> None:
        super().__init__(
            name,
            str(overrides.get("description", f"{name} plugin")),
            patterns,
            overrides.get("modes", (VimMode.NORMAL,)),  # type: ignore[arg-type]
        )
        self.calls = 0
        self.hooks: list[str] = []

    def perform_action(self, context: ExecutionContext) -> None:
        self.calls += 1

    def on_register(self) -> None:
        self.hooks.append("register")

    def on_unregister(self) -> None:
        self.hooks.append("unregister")


def make_context(mode: VimMode = VimMode.NORMAL) -> ExecutionContext:
    context = ExecutionContext(VimState(buffer=TextBuffer("text")))
    context.set_mode(mode)
    return context


def test_register_indexes_every_pattern_and_calls_hook() -> None:
    registry = PluginRegistry()
    plugin = RecordingPlugin("left", ("h", "<Left>"))

    registry.register(plugin)

    assert registry.get_plugin_by_pattern("h") is plugin
    assert registry.get_plugin_by_pattern("<Left>") is plugin
    assert plugin.hooks == ["register"]
    assert registry.stats().pattern_count == 2


def test_duplicate_pattern_is_rejected_without_partial_indexing() -> None:
    registry = PluginRegistry()
    registry.register(RecordingPlugin("first", ("gg",)))
    before = sorted(registry.get_all_patterns())

    with pytest.raises(VimError) as excinfo:
        registry.register(RecordingPlugin("second", ("x", "gg")))

    assert excinfo.value.code is ErrorCode.PATTERN_CONFLICT
    assert sorted(registry.get_all_patterns()) == before
    assert not registry.has_pattern("x")
    assert not registry.has_plugin("second")


def test_validate_plugin_reports_missing_metadata() -> None:
    registry = PluginRegistry()
    plugin = RecordingPlugin("", (), description="", modes=())

    result = registry.validate_plugin(plugin)

    assert not result.valid
    assert result.primary_code is ErrorCode.PLUGIN_REGISTRATION_FAILED
    assert len(result.errors) == 4


def test_validate_plugin_flags_invalid_and_repeated_patterns() -> None:
    registry = PluginRegistry()

    invalid = registry.validate_plugin(RecordingPlugin("bad", ("",)))
    repeated = registry.validate_plugin(RecordingPlugin("twice", ("j", "j")))

    assert invalid.primary_code is ErrorCode.INVALID_PATTERN
    assert repeated.primary_code is ErrorCode.PATTERN_CONFLICT


def test_duplicate_name_is_rejected() -> None:
    registry = PluginRegistry()
    registry.register(RecordingPlugin("same", ("a",)))

    with pytest.raises(VimError) as excinfo:
        registry.register(RecordingPlugin("same", ("b",)))

    assert excinfo.value.code is ErrorCode.PLUGIN_REGISTRATION_FAILED


def test_unregister_removes_patterns_and_calls_hook() -> None:
    registry = PluginRegistry()
    plugin = RecordingPlugin("down", ("j", "<Down>"))
    registry.register(plugin)

    removed = registry.unregister("down")

    assert removed is plugin
    assert registry.get_all_patterns() == []
    assert plugin.hooks == ["register", "unregister"]
    assert registry.unregister("down") is None
    assert registry.is_pattern_available("j")


def test_unregister_by_pattern_and_clear() -> None:
    registry = PluginRegistry()
    registry.register(RecordingPlugin("one", ("1x",)))
    registry.register(RecordingPlugin("two", ("2x",)))

    assert registry.unregister_by_pattern("1x") is not None
    assert registry.get_plugin_count() == 1

    registry.clear()
    assert registry.get_plugin_count() == 0


def test_revision_changes_on_mutation() -> None:
    registry = PluginRegistry()
    start = registry.revision()

    registry.register(RecordingPlugin("one", ("q",)))
    registry.unregister("one")

    assert registry.revision() == start + 2


def test_abstract_plugin_gates_on_enable_and_mode() -> None:
    plugin = RecordingPlugin("gate", ("z",))

    plugin.execute(make_context(VimMode.INSERT))
    assert plugin.calls == 0

    plugin.disable()
    plugin.execute(make_context())
    assert plugin.calls == 0
    assert not plugin.is_enabled()

    plugin.enable()
    plugin.execute(make_context())
    assert plugin.calls == 1


def test_abstract_plugin_pattern_validation_and_protocol() -> None:
    plugin = RecordingPlugin("gate", ("z", "<C-z>"))

    assert plugin.validate_pattern("<C-z>")
    assert not plugin.validate_pattern("q")
    assert not plugin.validate_pattern("")
    assert isinstance(plugin, VimPlugin)
    assert plugin.version == "1.0.0"
