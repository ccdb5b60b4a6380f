from conftest import FakePage
from key_actions import ActionDispatcher
from source_set import SourceSet


def make_set(names=('web-1', 'web-2', 'web-3')):
    actions = ActionDispatcher()
    ss = SourceSet(actions)
    for n in names:
        ss.add_source(n, FakePage(n))
    return ss, actions


def test_add_source_keeps_order_and_shortcuts():
    ss, actions = make_set()
    assert ss.names == ['web-1', 'web-2', 'web-3']
    assert ss.count == 3
    assert actions.numeric_keys == [1, 2, 3]
    assert actions.numeric[2].description == 'web-2'
    assert ss.active == 0


def test_remove_all_drops_pages_and_shortcuts():
    ss, actions = make_set()
    ss.remove_all()
    assert len(ss) == 0
    assert ss.active == -1
    assert ss.active_page is None
    assert actions.numeric_keys == []


def test_switch_to_notifies_listeners():
    ss, _ = make_set()
    seen = []
    ss.on_switch(seen.append)
    assert ss.switch_to(2)
    assert seen == [2]
    assert ss.active == 2
    assert ss.names[ss.active] == 'web-3'
    assert ss.active_page is ss.page(2)


def test_switch_out_of_range_is_noop():
    ss, _ = make_set()
    seen = []
    ss.on_switch(seen.append)
    ss.switch_to(1)
    for i in (-1, 3, 42):
        assert not ss.switch_to(i)
    assert ss.active == 1
    assert seen == [1]


def test_shortcuts_stop_at_nine():
    ss, actions = make_set([f'c{i}' for i in range(12)])
    assert actions.numeric_keys == list(range(1, 10))
    assert ss.count == 12


def test_works_without_dispatcher():
    ss = SourceSet()
    ss.add_source('solo', FakePage())
    assert ss.switch_to(0)
