# Copyright (c) 2013-2025 NASK. All rights reserved.
