"""Application services: plan pipeline, planning engine and result export."""
