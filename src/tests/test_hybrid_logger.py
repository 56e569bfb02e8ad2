import logging

from hybridLogger import HybridLogger


def read_log(tmp_path):
    files = list((tmp_path / "logs").glob("*.log"))
    assert len(files) == 1
    return files[0].read_text(encoding="utf-8")


def test_class_logger_writes_class_name_and_filters(tmp_path):
    main_logger = HybridLogger("LoggerTest", log_dir=str(tmp_path / "logs"), console=False)
    logger = main_logger.get_class_logger("TutorialController", logging.INFO)
    logger.debug("hidden detail")
    logger.info("📖 Tutorial Step 1/13: welcome")
    logger.flush()

    content = read_log(tmp_path)
    main_logger.cleanup()

    assert "[INFO] [TutorialController] 📖 Tutorial Step 1/13: welcome" in content
    assert "hidden detail" not in content


def test_create_class_logger_shares_handlers(tmp_path):
    main_logger = HybridLogger("LoggerTest", log_dir=str(tmp_path / "logs"), console=False)
    parent = main_logger.get_class_logger("Tutorial", logging.DEBUG)
    child = parent.create_class_logger("GameHost")
    child.debug("camera moved")
    child.flush()

    content = read_log(tmp_path)
    main_logger.cleanup()

    assert child.level == logging.DEBUG
    assert "[GameHost] camera moved" in content


def test_error_includes_exception_details(tmp_path):
    main_logger = HybridLogger("LoggerTest", log_dir=str(tmp_path / "logs"), console=False)
    logger = main_logger.get_main_logger()
    try:
        raise ValueError("bad step")
    except ValueError as e:
        logger.error("Tutorial loop error", exception=e)

    content = read_log(tmp_path)
    main_logger.cleanup()

    assert "Type: ValueError" in content
    assert "Traceback" in content


def test_context_manager_returns_main_logger(tmp_path):
    with HybridLogger("LoggerTest", log_dir=str(tmp_path / "logs"), console=False) as logger:
        logger.info("started")
        assert logger.class_name == "Main"
    assert "started" in read_log(tmp_path)


def test_console_level_keeps_info_in_file_only(tmp_path, capsys):
    main_logger = HybridLogger("LoggerTest", log_dir=str(tmp_path / "logs"), console_level=logging.WARNING)
    logger = main_logger.get_class_logger("GameHost")
    logger.info("⏸ PAUSED")
    logger.warning("💥 Collision - camera locked")
    logger.flush()

    console = capsys.readouterr().out
    content = main_logger.log_path.read_text(encoding="utf-8")
    main_logger.cleanup()

    assert "PAUSED" not in console
    assert "Collision" in console
    assert "PAUSED" in content
    assert "Collision" in content
