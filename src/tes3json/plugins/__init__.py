from tes3json.plugins.codecs import tes3conv_codec  # noqa: F401
