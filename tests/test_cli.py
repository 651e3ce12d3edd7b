import logging

import huffman_cli


def test_compress_then_decompress(tmp_path, caplog):
	caplog.set_level(logging.INFO)
	src = tmp_path / "notes.txt"
	packed = tmp_path / "notes.hf"
	restored = tmp_path / "notes.out"
	src.write_bytes(b"lorem ipsum dolor sit amet " * 40)

	assert huffman_cli.main(["compress", str(src), str(packed)]) == 0
	assert huffman_cli.main(["decompress", str(packed), str(restored)]) == 0
	assert restored.read_bytes() == src.read_bytes()
	assert "Encode:" in caplog.text
	assert "Decode:" in caplog.text


def test_bad_magic_exits_with_format_error(tmp_path):
	src = tmp_path / "bogus.hf"
	dst = tmp_path / "bogus.out"
	src.write_bytes(b"\x00" * 16)

	assert huffman_cli.main(["decompress", str(src), str(dst)]) == 2
	assert not dst.exists()


def test_count_header_rejected(tmp_path):
	src = tmp_path / "in.txt"
	dst = tmp_path / "in.hf"
	src.write_bytes(b"abc")

	assert huffman_cli.main(["compress", "--header", "counts", str(src), str(dst)]) == 2
	assert not dst.exists()


def test_missing_input_exits_with_io_error(tmp_path):
	assert huffman_cli.main(["compress", str(tmp_path / "absent"), str(tmp_path / "out")]) == 1
