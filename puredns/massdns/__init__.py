"""Run massdns at a limited query rate and process its output."""