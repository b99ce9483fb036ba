about = {
    "__title__": "smpptlv",
    "__description__": "Optional parameters (TLVs) for SMPP PDUs.",
    "__version__": "v0.1.0",
    "__license__": "MIT",
}
