import os, shutil
import pytest


@pytest.fixture(autouse=True, scope="session")
def _init_logging_for_tests(tmp_path_factory):
    # Cada corrida de tests escribe logs a un directorio temporal
    log_dir = tmp_path_factory.mktemp("logs")
    os.environ["LOG_DIR"] = str(log_dir)
    os.environ["LOG_LEVEL"] = "DEBUG"

    from listaprecios.logging_setup import init_logging
    init_logging(level="DEBUG", log_dir=str(log_dir))

    yield
    shutil.rmtree(log_dir, ignore_errors=True)


@pytest.fixture
def catalogo():
    from listaprecios.catalog import Product
    return [
        Product(code="10001", description="Pintura Látex Interior 20L", brand="Alba",
                currency="1", tax="503", price=50000.0),
        Product(code="Z10", description="Rodillo antigota", brand="Atlas",
                currency="2", tax="501", price_foreign=10.0),
        Product(code="D77", description="Esmalte sintético", brand="Sherwin",
                currency="3", tax="", price_foreign=4.0),
        Product(code="X01", description="Látex exterior Alba", brand="Alba",
                currency="9", tax="503", price=100.0, price_foreign=1.0),
    ]
