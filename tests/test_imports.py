def test_import_delve_package() -> None:
    import importlib

    module = importlib.import_module("delve")
    assert module.__version__


def test_import_rng_no_side_effects() -> None:
    from delve.core.rng import RNG

    rng = RNG(42)
    value = rng.randint(0, 1)
    assert value in (0, 1)


def test_service_exports() -> None:
    from delve import services

    for name in services.__all__:
        assert hasattr(services, name)
