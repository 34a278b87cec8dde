from reptile_log.program import main

if __name__ == '__main__':
    raise SystemExit(main())
