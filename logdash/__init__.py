# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 logdash Rui Pinheiro

"""logdash: startup option and configuration interpreter for a web log dashboard."""
