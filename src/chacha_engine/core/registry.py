import logging

# setup logging
logger = logging.getLogger("ChaChaEngine")

# dictionary to store implementations
ENCRYPTION_IMPLEMENTATIONS = {}


def register_implementation(name):
    # register an encryption implementation
    def decorator(impl_class):
        ENCRYPTION_IMPLEMENTATIONS[name] = impl_class
        return impl_class
    return decorator


def get_implementation(name):
    # get an implementation by name
    return ENCRYPTION_IMPLEMENTATIONS.get(name)


def list_implementations():
    # list all registered implementations
    return list(ENCRYPTION_IMPLEMENTATIONS.keys())


def register_all_implementations():
    # import here to avoid circular imports
    from chacha_engine.chacha.implementation import (
        CHACHA_IMPLEMENTATIONS,
        ChaCha20Implementation,
        register_all_chacha20_variants,
    )

    register_all_chacha20_variants()

    # register ChaCha20 implementation directly
    register_implementation("chacha20")(ChaCha20Implementation)

    for name, impl in CHACHA_IMPLEMENTATIONS.items():
        if name not in ["chacha20"]:  # already registered
            register_implementation(name)(impl)

    logger.info(f"Registered ChaCha20 implementations: {', '.join(CHACHA_IMPLEMENTATIONS.keys())}")
    logger.info(f"Total registered implementations: {len(ENCRYPTION_IMPLEMENTATIONS)}")
    return ENCRYPTION_IMPLEMENTATIONS
