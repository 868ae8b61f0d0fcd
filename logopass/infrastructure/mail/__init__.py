# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .smtp_mailer import SmtpMailer

__all__ = ["SmtpMailer"]
