"""
共通テストフィクスチャ

アノテーションツールのテストで使用される共通のフィクスチャを定義します。
画像ディレクトリ、出力ディレクトリ、ラベルファイルを一時ディレクトリに作成します。
"""

import pytest
from pathlib import Path


@pytest.fixture
def project_root() -> Path:
    """プロジェクトのルートディレクトリを返す"""
    return Path(__file__).parent.parent


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """テスト用の一時ディレクトリを提供"""
    return tmp_path


@pytest.fixture
def sample_image() -> "np.ndarray":
    """テスト用のBGR画像 (高さ100 x 幅200) を返す"""
    import numpy as np

    img = np.full((100, 200, 3), 100, dtype=np.uint8)
    # 左上に明るい正方形
    img[10:30, 10:30] = 200
    return img


@pytest.fixture
def image_dir(temp_dir: Path) -> Path:
    """3枚の画像を含む入力ディレクトリを作成

    ファイル名は scan_000001.png ～ scan_000003.png (識別子は末尾6文字)。
    """
    import numpy as np
    import cv2

    directory = temp_dir / "images"
    directory.mkdir()
    for i in range(1, 4):
        img = np.full((40, 60, 3), 30 * i, dtype=np.uint8)
        cv2.imwrite(str(directory / f"scan_{i:06d}.png"), img)
    return directory


@pytest.fixture
def output_dir(temp_dir: Path) -> Path:
    """GTマスクの出力先 (まだ存在しない)"""
    return temp_dir / "GT"


@pytest.fixture
def sample_label_file(temp_dir: Path) -> Path:
    """テスト用のmanlabel.txtを作成"""
    path = temp_dir / "manlabel.txt"
    with open(path, "w") as f:
        f.write("orig_000001.png 100 50 120 80 scratch\n")
        f.write("orig_000001.png 90 60 95 70 sound\n")
        f.write("orig_000002.png 10 20 30 40 dent\n")
    return path
