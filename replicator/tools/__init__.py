"""Registration of the org and memory tool families."""