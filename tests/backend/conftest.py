"""
バックエンドテスト用フィクスチャ

OpenCV highgui ウィンドウのフェイクを提供します。
ディスプレイなしでアノテーションセッションを実行可能にします。
"""

import pytest
import sys
from pathlib import Path


# scriptsディレクトリをパスに追加
@pytest.fixture(autouse=True)
def add_scripts_to_path():
    """scriptsディレクトリをsys.pathに追加"""
    scripts_path = Path(__file__).parent.parent.parent / "scripts"
    if str(scripts_path) not in sys.path:
        sys.path.insert(0, str(scripts_path))
    yield


class FakeWindow:
    """HighGuiWindow のフェイク

    script の要素を poll_key のたびに先頭から消費します。
    - int: キーコードとして返す
    - tuple: (event, x, y, flags) としてマウスコールバックに渡す
    - "close": ユーザーがウィンドウを閉じたことにする
    script が空になると "q" を返します。
    """

    def __init__(self, script=()):
        self.script = list(script)
        self.opened = False
        self.closed_by_user = False
        self.open_calls = 0
        self.close_calls = 0
        self.mouse_callback = None
        self.trackbars = {}
        self.trackbar_callbacks = {}
        self.trackbar_sets = []
        self.frames = []
        self.delays = []

    def open(self):
        self.open_calls += 1
        self.opened = True

    def set_mouse_callback(self, callback):
        self.mouse_callback = callback

    def create_trackbar(self, name, value, min_value, max_value, callback):
        self.trackbars[name] = value
        self.trackbar_callbacks[name] = callback

    def set_trackbar_pos(self, name, value):
        # OpenCV はプログラムからの変更でもコールバックを呼ぶ
        self.trackbar_sets.append((name, value))
        changed = self.trackbars.get(name) != value
        self.trackbars[name] = value
        if changed:
            self.trackbar_callbacks[name](value)

    def user_moves_trackbar(self, name, value):
        """ユーザーによるトラックバー操作"""
        self.trackbars[name] = value
        self.trackbar_callbacks[name](value)

    def show(self, frame):
        self.frames.append(frame)

    def poll_key(self, delay_ms):
        self.delays.append(delay_ms)
        while self.script:
            item = self.script.pop(0)
            if isinstance(item, tuple):
                self.mouse_callback(*item)
                continue
            if item == "close":
                self.closed_by_user = True
                return -1
            return item
        return ord("q")

    def is_open(self):
        return self.opened and not self.closed_by_user

    def close(self):
        self.close_calls += 1
        self.opened = False


@pytest.fixture
def fake_window():
    """スクリプト駆動のフェイクウィンドウ"""
    return FakeWindow()
