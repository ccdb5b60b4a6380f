from event_log import EventLog


def test_creates_file_and_appends(tmp_path):
    log = EventLog(tmp_path / 'logview.log')
    assert log.path.read_text().splitlines() == []
    log.info('web-1', 'Streaming logs')
    log.error('web-2', 'Log stream aborted')
    lines = log.path.read_text().splitlines()
    assert len(lines) == 2
    assert lines[0].endswith('INFO  [web-1] Streaming logs')
    assert ' UTC  ' in lines[0]
    assert 'ERROR [web-2]' in lines[1]


def test_debug_only_when_enabled(tmp_path):
    quiet = EventLog(tmp_path / 'quiet.log')
    quiet.debug('web-1', 'Cleansing logs')
    assert quiet.path.read_text().splitlines() == []
    loud = EventLog(tmp_path / 'loud.log', debug=True)
    loud.debug('web-1', 'Cleansing logs')
    assert loud.path.read_text().splitlines()[0].endswith('DEBUG [web-1] Cleansing logs')


def test_existing_file_is_kept(tmp_path):
    path = tmp_path / 'logview.log'
    path.write_text('earlier\n')
    EventLog(path).info('x', 'y')
    assert path.read_text().splitlines()[0] == 'earlier'
