"""Entry point for mailchimp-api-v3."""

import argparse
import sys
import singer.utils
from .config import ClientConfig, Keys
from .client import MailChimp
from .exceptions import MailChimpError
import mailchimp_api_v3.logger as logger
import mailchimp_api_v3.jsonext as json


def _key_value(text):
    key, sep, value = text.partition('=')
    if not sep or not key:
        raise argparse.ArgumentTypeError(
            'expected TAG=VALUE, got {!r}'.format(text))
    return key, value


def build_parser():
    parser = argparse.ArgumentParser(prog='mailchimp-api-v3')
    parser.add_argument('-c', '--config', required=True,
                        help='Config file (JSON) with at least an api_key')
    commands = parser.add_subparsers(dest='command', metavar='command')
    commands.required = True

    commands.add_parser('validate', help='Check that the API key works')
    commands.add_parser('account', help='Show account details')

    def member_command(name, help_):
        p = commands.add_parser(name, help=help_)
        p.add_argument('list_id', help="List id, or '-' for the configured one")
        p.add_argument('email')
        return p

    member_command('status', 'Show a member status')
    p = member_command('subscribe', 'Subscribe an address to a list')
    p.add_argument('--merge', type=_key_value, action='append', default=[],
                   metavar='TAG=VALUE', help='Merge field value')
    p.add_argument('--interest', action='append', default=[],
                   metavar='ID', help='Interest id to enable')
    p.add_argument('--no-double-opt-in', dest='double_opt_in',
                   action='store_false',
                   help='Subscribe directly instead of sending a confirmation')
    member_command('unsubscribe', 'Unsubscribe an address from a list')
    member_command('remove', 'Delete a member from a list')
    p = member_command('tags', 'List member tags')
    p.add_argument('--count', type=int, default=10)
    p.add_argument('--offset', type=int, default=0)
    for name, help_ in (('tag', 'Add tags to a member'),
                        ('untag', 'Remove tags from a member')):
        p = member_command(name, help_)
        p.add_argument('tag_names', nargs='+', metavar='TAG')

    def page_command(name, help_):
        p = commands.add_parser(name, help=help_)
        p.add_argument('list_id', help="List id, or '-' for the configured one")
        p.add_argument('--offset', type=int, default=0)
        p.add_argument('--limit', type=int, default=10)
        return p

    page_command('merge-fields', 'List merge fields')
    page_command('categories', 'List interest categories')
    p = page_command('interests', 'List interests of a category')
    p.add_argument('group_id')
    return parser


def _list_id(args, config):
    if args.list_id != '-':
        return args.list_id
    if not config.list_id:
        raise MailChimpError("No list id given and no '{}' in config."
                             .format(Keys.list_id))
    return config.list_id


def _print(obj):
    print(json.dumps(obj, indent=2, sort_keys=True))


def run(client, args, config):
    """Run one command; return True/False for yes-no commands, else None."""
    command = args.command
    if command == 'validate':
        return client.validate_api_key()
    if command == 'account':
        account = client.get_account_details()
        if account is None:
            return False
        _print(account)
        return None
    list_id = _list_id(args, config)
    if command == 'status':
        print(client.get_subscriber_status(list_id, args.email))
    elif command == 'subscribe':
        return client.subscribe_to_list(list_id, args.email,
                                        merge_vars=dict(args.merge),
                                        double_opt_in=args.double_opt_in,
                                        interests={i: True
                                                   for i in args.interest})
    elif command == 'unsubscribe':
        return client.unsubscribe_from_list(list_id, args.email)
    elif command == 'remove':
        return client.remove_from_list(list_id, args.email)
    elif command == 'tags':
        _print(client.get_member_tags(list_id, args.email, count=args.count,
                                      offset=args.offset))
    elif command == 'tag':
        return client.add_member_tags(list_id, args.email, args.tag_names)
    elif command == 'untag':
        return client.remove_member_tags(list_id, args.email, args.tag_names)
    elif command == 'merge-fields':
        _print(client.get_list_fields(list_id, args.offset, args.limit))
    elif command == 'categories':
        _print(client.get_list_group_categories(list_id, args.offset,
                                                args.limit))
    elif command == 'interests':
        _print(client.get_list_group(list_id, args.group_id, args.offset,
                                     args.limit))
    return None


def main(argv=None):
    """Entry point for mailchimp-api-v3."""
    args = build_parser().parse_args(argv)
    raw_config = singer.utils.load_json(args.config)
    singer.utils.check_config(raw_config, ClientConfig.required_keys)
    config = ClientConfig(raw_config)
    with MailChimp.from_config(config) as client:
        try:
            outcome = run(client, args, config)
        except MailChimpError as e:
            logger.exception(e, command=args.command,
                             last_error=client.last_error)
            return 2
    if outcome is None:
        return 0
    print('yes' if outcome else 'no')
    return 0 if outcome else 1


if __name__ == '__main__':
    sys.exit(main())
