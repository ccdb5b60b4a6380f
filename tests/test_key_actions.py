import pytest

from key_actions import ActionDispatcher, KeyAction, KeyEvent, KEY_ESC, KEY_PGUP, KEY_UP


@pytest.fixture
def calls():
    return []


@pytest.fixture
def dispatcher(calls):
    d = ActionDispatcher(on_numeric=lambda n: calls.append(('numeric', n)))
    d.set_actions({
        KEY_ESC: KeyAction("Back", lambda evt: calls.append('back')),
        'c': KeyAction("Clear", lambda evt: calls.append('clear')),
        'h': KeyAction("Help"),
    })
    return d


def test_named_key_action_consumes_event(dispatcher, calls):
    assert dispatcher.dispatch(KeyEvent(KEY_ESC)) is None
    assert calls == ['back']


def test_character_action_consumes_event(dispatcher, calls):
    assert dispatcher.dispatch(KeyEvent.rune('c')) is None
    assert calls == ['clear']


def test_label_only_action_passes_through(dispatcher, calls):
    evt = KeyEvent.rune('h')
    assert dispatcher.dispatch(evt) is evt
    assert calls == []


def test_numeric_shortcut_selects_source(dispatcher, calls):
    dispatcher.bind_numeric(1, 'web-1')
    dispatcher.bind_numeric(2, 'web-2')
    assert dispatcher.dispatch(KeyEvent.rune('2')) is None
    assert calls == [('numeric', 2)]


def test_unbound_digit_passes_through(dispatcher, calls):
    dispatcher.bind_numeric(1, 'web-1')
    evt = KeyEvent.rune('3')
    assert dispatcher.dispatch(evt) is evt
    assert calls == []


@pytest.mark.parametrize('ch', ['²', '³', '①'])
def test_digit_like_runes_pass_through(dispatcher, calls, ch):
    dispatcher.bind_numeric(2, 'web-2')
    evt = KeyEvent.rune(ch)
    assert dispatcher.dispatch(evt) is evt
    assert calls == []


@pytest.mark.parametrize('evt', [KeyEvent(KEY_UP), KeyEvent(KEY_PGUP), KeyEvent.rune('z')])
def test_unknown_keys_pass_through_unmodified(dispatcher, calls, evt):
    assert dispatcher.dispatch(evt) is evt
    assert calls == []


@pytest.mark.parametrize('n', [0, 10, -1])
def test_numeric_shortcuts_are_bounded(dispatcher, n):
    with pytest.raises(ValueError):
        dispatcher.bind_numeric(n, 'x')


def test_clear_numeric(dispatcher):
    dispatcher.bind_numeric(1, 'a')
    dispatcher.bind_numeric(2, 'b')
    dispatcher.clear_numeric()
    assert dispatcher.numeric_keys == []


def test_hints_show_sources_only_when_several(dispatcher):
    dispatcher.bind_numeric(1, 'web-1')
    assert ('1', 'web-1') not in dispatcher.hints()
    dispatcher.bind_numeric(2, 'web-2')
    hints = dispatcher.hints()
    assert hints[:2] == [('1', 'web-1'), ('2', 'web-2')]
    assert ('esc', 'Back') in hints
