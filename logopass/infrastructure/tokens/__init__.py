# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .aes_codec import AesGcmTokenCodec

__all__ = ["AesGcmTokenCodec"]
