from updatebot.app import main


def run():
    try:
        main()
    except Exception as err:
        print('Exception occurred')
        if hasattr(err, 'error_message'):
            print(f'GitLab said: {err.error_message}')
        raise


if __name__ == '__main__':
    run()
