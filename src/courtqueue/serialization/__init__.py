from courtqueue.serialization.codec import StateCodec, decode_state, encode_state

__all__ = ["StateCodec", "encode_state", "decode_state"]
