import pytest

from mediadeck.media import FileType, MediaData, Source
from mediadeck.playlist_db import PlaylistDBError, PlaylistNotFound, PlaylistStore


def _local(name):
    return MediaData(
        filename=name,
        path="/music",
        type=FileType.MP3,
        source=Source.LOCAL_FILE,
        loaded=True,
    )


@pytest.fixture
def store(tmp_path):
    s = PlaylistStore(tmp_path / "playlists")
    s.create_playlist("favourites")
    s.load("favourites")
    return s


def test_load_missing_playlist_raises(tmp_path):
    s = PlaylistStore(tmp_path)
    with pytest.raises(PlaylistNotFound):
        s.load("nothing")
    assert s.is_loaded is False


def test_load_sets_state(store):
    assert store.is_loaded is True
    assert store.current_playlist == "favourites"


def test_database_file_created(store):
    assert store.db_path.name == ".playlists.db"
    assert store.db_path.exists()


def test_add_and_get_track_round_trip(store):
    track = _local("song.mp3")
    track_id = store.add_track(track)
    assert store.get_track(track_id) == track


def test_get_missing_track_raises(store):
    with pytest.raises(PlaylistNotFound):
        store.get_track(42)


def test_operations_require_loaded_playlist(tmp_path):
    s = PlaylistStore(tmp_path)
    with pytest.raises(PlaylistDBError):
        s.add_track(_local("a.mp3"))
    with pytest.raises(PlaylistDBError):
        s.next()
    assert s.track_exists(1) is False


def test_track_exists(store):
    track_id = store.add_track(_local("a.mp3"))
    assert store.track_exists(track_id) is True
    assert store.track_exists(track_id + 100) is False


def test_next_and_previous(store):
    first = _local("a.mp3")
    second = _local("b.mp3")
    first_id = store.add_track(first)
    second_id = store.add_track(second)
    assert store.next() == first
    assert store.current_track_id == first_id
    assert store.next() == second
    assert store.current_track_id == second_id
    assert store.previous() == first
    assert store.current_track == first


def test_next_past_end_keeps_position(store):
    store.add_track(_local("a.mp3"))
    store.next()
    position = store.current_track_id
    with pytest.raises(PlaylistNotFound):
        store.next()
    assert store.current_track_id == position


def test_previous_at_start_raises(store):
    with pytest.raises(PlaylistDBError):
        store.previous()


def test_set_current_track(store):
    store.add_track(_local("a.mp3"))
    second = _local("b.mp3")
    second_id = store.add_track(second)
    assert store.set_current_track(second_id) == second
    assert store.current_track_id == second_id
    with pytest.raises(PlaylistNotFound):
        store.set_current_track(second_id + 50)


def test_eject_resets_state(store):
    store.add_track(_local("a.mp3"))
    store.next()
    store.eject()
    assert store.is_loaded is False
    assert store.current_playlist == ""
    assert store.current_track == MediaData()


def test_add_playlist_imports_urls(tmp_path):
    m3u = tmp_path / "radio.m3u"
    m3u.write_text(
        "#EXTM3U\n"
        "#EXTINF:-1,Station one\n"
        "http://stream.example.com/one\n"
        "https://stream.example.com/two.mp3\n"
        "/local/file.mp3\n",
        encoding="utf-8",
    )
    s = PlaylistStore(tmp_path / "db")
    added = s.add_playlist(MediaData.from_path(str(m3u)), "radio")
    assert added == 2
    assert s.current_playlist == "radio"
    first = s.next()
    assert first.url == "http://stream.example.com/one"
    assert first.source == Source.REMOTE_FILE
    assert first.type == FileType.M3U
    assert s.next().url == "https://stream.example.com/two.mp3"


def test_add_playlist_missing_file_raises(tmp_path):
    s = PlaylistStore(tmp_path)
    missing = MediaData.from_path(str(tmp_path / "absent.m3u"))
    with pytest.raises(PlaylistDBError):
        s.add_playlist(missing, "absent")


def test_name_with_quotes_is_stored_safely(tmp_path):
    s = PlaylistStore(tmp_path)
    name = 'it\'s "mine"'
    s.create_playlist(name)
    s.load(name)
    track = _local("x.mp3")
    assert s.get_track(s.add_track(track)) == track


def test_empty_name_rejected(tmp_path):
    s = PlaylistStore(tmp_path)
    with pytest.raises(PlaylistDBError):
        s.create_playlist("")


def test_playlists_persist_across_instances(tmp_path):
    first = PlaylistStore(tmp_path)
    first.create_playlist("keep")
    first.load("keep")
    track = _local("kept.mp3")
    track_id = first.add_track(track)
    second = PlaylistStore(tmp_path)
    second.load("keep")
    assert second.get_track(track_id) == track