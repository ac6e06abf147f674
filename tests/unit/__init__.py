# SPDX-License-Identifier: AGPL-3.0-or-later
# pylint: disable=missing-module-docstring
