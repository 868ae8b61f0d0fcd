# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""logopass: login/password service with encrypted bearer tokens."""
