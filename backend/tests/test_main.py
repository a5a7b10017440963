import logging


def test_requests_are_logged_by_the_app_module_logger(client, caplog):
    with caplog.at_level(logging.INFO, logger="main"):
        response = client.get("/")

    assert response.status_code == 200
    assert any(
        record.name == "main" and "GET / -> 200" in record.getMessage()
        for record in caplog.records
    )
