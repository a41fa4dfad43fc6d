"""python -m tempfolders でデモプログラムを実行する."""

from tempfolders.demo import main

main()
