from .preset import DecoderSettings, Preset, aseprite

__all__ = ('DecoderSettings', 'Preset', 'aseprite')
