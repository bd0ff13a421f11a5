"""A threaded terminal progress bar with a moving-average rate."""