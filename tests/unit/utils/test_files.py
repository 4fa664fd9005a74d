from workout_logger.utils import files


def test_check_import_path_accepts_existing_csv(tmp_path):
    path = tmp_path / "workouts.csv"
    path.write_text("")
    assert files.check_import_path(str(path)) is None


def test_check_import_path_rejects_blank():
    assert files.check_import_path("  ") == "Invalid file path: null or blank."
    assert files.check_import_path(None) is not None


def test_check_import_path_rejects_missing_file(tmp_path):
    error = files.check_import_path(str(tmp_path / "nope.csv"))
    assert error.startswith("File not found")


def test_check_import_path_rejects_directory(tmp_path):
    assert files.check_import_path(str(tmp_path)).startswith("File not found")


def test_check_import_path_rejects_extension(tmp_path):
    path = tmp_path / "workouts.json"
    path.write_text("")
    assert "extension" in files.check_import_path(str(path))


def test_check_export_path_accepts_txt_upper_case(tmp_path):
    assert files.check_export_path(str(tmp_path / "OUT.TXT")) is None


def test_check_export_path_rejects_extension(tmp_path):
    assert "extension" in files.check_export_path(str(tmp_path / "out.xlsx"))


def test_check_export_path_rejects_missing_parent(tmp_path):
    error = files.check_export_path(str(tmp_path / "missing" / "out.csv"))
    assert error == "Parent directory does not exist."
